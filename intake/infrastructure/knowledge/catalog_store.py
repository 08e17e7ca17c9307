from __future__ import annotations

import re
from functools import lru_cache
from typing import Mapping

from intake.application.exceptions import MissingTranslationError
from intake.application.ports.catalog import CatalogPort
from intake.domain.entities.catalog_option import LanguageOption, PaymentOption, ServiceOption
from intake.infrastructure.knowledge.catalog_data import (
    FALLBACK_LANGUAGE,
    LANGUAGE_OPTIONS,
    LANGUAGE_QUESTION,
    OPERATOR_LINKS,
    PAYMENT_OPTIONS,
    SERVICE_OPTIONS,
    TRANSLATIONS,
    WELCOME_MESSAGES,
)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class CatalogStore(CatalogPort):
    def __init__(
        self,
        translations: dict[str, dict[str, str]] | None = None,
        fallback_language: str = FALLBACK_LANGUAGE,
    ) -> None:
        self._translations = translations or TRANSLATIONS
        self._fallback_language = fallback_language
        if self._fallback_language not in self._translations:
            raise ValueError(f"Fallback language {fallback_language!r} has no translations")
        # per-instance cache; the key is (language, key), params are applied after
        self._resolve = lru_cache(maxsize=512)(self._resolve_template)

    def lookup(self, language: str | None, key: str, params: Mapping[str, str | None] | None = None) -> str:
        template = self._resolve(language or self._fallback_language, key)
        return interpolate(template, params or {})

    def _resolve_template(self, language: str, key: str) -> str:
        table = self._translations.get(language)
        if table is not None and key in table:
            return table[key]
        fallback = self._translations[self._fallback_language]
        if key not in fallback:
            raise MissingTranslationError(key)
        return fallback[key]

    def languages(self) -> tuple[LanguageOption, ...]:
        return LANGUAGE_OPTIONS

    def services(self) -> tuple[ServiceOption, ...]:
        return SERVICE_OPTIONS

    def payments(self) -> tuple[PaymentOption, ...]:
        return PAYMENT_OPTIONS

    def get_language(self, language_id: str) -> LanguageOption | None:
        return next((opt for opt in LANGUAGE_OPTIONS if opt.language_id == language_id), None)

    def get_service(self, service_id: str) -> ServiceOption | None:
        return next((opt for opt in SERVICE_OPTIONS if opt.service_id == service_id), None)

    def get_payment(self, payment_id: str) -> PaymentOption | None:
        return next((opt for opt in PAYMENT_OPTIONS if opt.payment_id == payment_id), None)

    def operator_link(self, operator: str) -> str | None:
        return OPERATOR_LINKS.get(operator)

    def welcome_messages(self) -> tuple[str, ...]:
        return WELCOME_MESSAGES

    def language_question(self) -> str:
        return LANGUAGE_QUESTION


def interpolate(template: str, params: Mapping[str, str | None]) -> str:
    """Fill `{name}` placeholders; missing parameters stay in the text as-is."""

    def _replace(match: re.Match[str]) -> str:
        value = params.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return _PLACEHOLDER.sub(_replace, template)
