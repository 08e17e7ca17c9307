from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from intake.domain.entities.catalog_option import LanguageOption, PaymentOption, ServiceOption


class CatalogPort(ABC):
    @abstractmethod
    def lookup(self, language: str | None, key: str, params: Mapping[str, str | None] | None = None) -> str:
        """
        Resolve a localized string and interpolate `{name}` placeholders.
        Unknown languages and keys fall back to the default language.
        """
        raise NotImplementedError

    @abstractmethod
    def languages(self) -> tuple[LanguageOption, ...]:
        raise NotImplementedError

    @abstractmethod
    def services(self) -> tuple[ServiceOption, ...]:
        raise NotImplementedError

    @abstractmethod
    def payments(self) -> tuple[PaymentOption, ...]:
        raise NotImplementedError

    @abstractmethod
    def get_language(self, language_id: str) -> LanguageOption | None:
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> ServiceOption | None:
        raise NotImplementedError

    @abstractmethod
    def get_payment(self, payment_id: str) -> PaymentOption | None:
        raise NotImplementedError

    @abstractmethod
    def operator_link(self, operator: str) -> str | None:
        """Contact URL for an operator, or None if the operator has none."""
        raise NotImplementedError

    @abstractmethod
    def welcome_messages(self) -> tuple[str, ...]:
        raise NotImplementedError

    @abstractmethod
    def language_question(self) -> str:
        raise NotImplementedError
