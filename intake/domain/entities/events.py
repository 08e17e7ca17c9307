from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class StartCommand:
    pass


@dataclass(frozen=True)
class FreeText:
    text: str


@dataclass(frozen=True)
class LanguageChosen:
    language_id: str


@dataclass(frozen=True)
class ServiceToggled:
    service_id: str


@dataclass(frozen=True)
class ServicesConfirmed:
    pass


@dataclass(frozen=True)
class BackToProductRequest:
    pass


@dataclass(frozen=True)
class BackToServices:
    pass


@dataclass(frozen=True)
class PaymentChosen:
    payment_id: str


@dataclass(frozen=True)
class UnrecognizedAction:
    token: str


WorkflowEvent = Union[
    StartCommand,
    FreeText,
    LanguageChosen,
    ServiceToggled,
    ServicesConfirmed,
    BackToProductRequest,
    BackToServices,
    PaymentChosen,
    UnrecognizedAction,
]


@dataclass(frozen=True)
class InboundEvent:
    user_id: str
    event: WorkflowEvent
    handle: str | None = None
    update_id: int | None = None
