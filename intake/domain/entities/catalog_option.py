from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageOption:
    language_id: str
    label: str
    emoji: str
    operator: str


@dataclass(frozen=True)
class ServiceOption:
    service_id: str
    label: str
    emoji: str


@dataclass(frozen=True)
class PaymentOption:
    payment_id: str
    label: str
    emoji: str
