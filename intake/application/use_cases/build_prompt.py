from __future__ import annotations

from enum import Enum

from intake.application.ports.catalog import CatalogPort
from intake.application.utils import action_tokens
from intake.domain.entities.events import (
    BackToProductRequest,
    BackToServices,
    LanguageChosen,
    PaymentChosen,
    ServicesConfirmed,
    ServiceToggled,
)
from intake.domain.entities.prompt import Action, LinkAction, Prompt
from intake.domain.entities.session import Session

SELECTED_MARK = "✅ "


class PromptKind(str, Enum):
    LANGUAGE_SELECTION = "language_selection"
    PRODUCT_REQUEST = "product_request"
    SERVICE_SELECTION = "service_selection"
    PAYMENT_SELECTION = "payment_selection"
    SUMMARY = "summary"
    OPERATOR_CONNECT = "operator_connect"
    CLOSING_NOTE = "closing_note"
    NO_SERVICES_WARNING = "no_services_warning"
    USE_BUTTONS_WARNING = "use_buttons_warning"
    RATE_LIMITED = "rate_limited"
    GENERIC_ERROR = "generic_error"


class PromptBuilder:
    """Compose outbound prompts from catalog lookups. Never mutates the session."""

    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog
        self._builders = {
            PromptKind.LANGUAGE_SELECTION: self._language_selection,
            PromptKind.PRODUCT_REQUEST: lambda s: self._text(s, "product_request"),
            PromptKind.SERVICE_SELECTION: self._service_selection,
            PromptKind.PAYMENT_SELECTION: self._payment_selection,
            PromptKind.SUMMARY: self._summary,
            PromptKind.OPERATOR_CONNECT: self._operator_connect,
            PromptKind.CLOSING_NOTE: lambda s: self._text(s, "ask_operator"),
            PromptKind.NO_SERVICES_WARNING: lambda s: self._text(s, "no_services_selected"),
            PromptKind.USE_BUTTONS_WARNING: lambda s: self._text(s, "please_use_keyboard"),
            PromptKind.RATE_LIMITED: lambda s: self._text(s, "rate_limited"),
            PromptKind.GENERIC_ERROR: lambda s: self._text(s, "generic_error"),
        }

    def build(self, kind: PromptKind, session: Session | None) -> Prompt:
        return self._builders[kind](session)

    def build_welcome(self) -> list[Prompt]:
        return [Prompt(text=text) for text in self._catalog.welcome_messages()]

    def _lang(self, session: Session | None) -> str | None:
        return session.language if session is not None else None

    def _text(self, session: Session | None, key: str) -> Prompt:
        return Prompt(text=self._catalog.lookup(self._lang(session), key))

    def _language_selection(self, session: Session | None) -> Prompt:
        actions = tuple(
            Action(
                label=f"{option.emoji} {option.label}",
                token=action_tokens.encode(LanguageChosen(option.language_id)),
            )
            for option in self._catalog.languages()
        )
        return Prompt(text=self._catalog.language_question(), actions=actions, columns=2)

    def _service_selection(self, session: Session | None) -> Prompt:
        lang = self._lang(session)
        selected = session.selected_services if session is not None else set()
        text = (
            f"{self._catalog.lookup(lang, 'service_selection')}\n\n"
            f"{self._catalog.lookup(lang, 'service_selection_title')}"
        )
        actions = [
            Action(
                label=(
                    f"{SELECTED_MARK if option.service_id in selected else ''}"
                    f"{option.emoji} {self._catalog.lookup(lang, f'buttons.services.{option.service_id}')}"
                ),
                token=action_tokens.encode(ServiceToggled(option.service_id)),
            )
            for option in self._catalog.services()
        ]
        actions.append(
            Action(label=self._catalog.lookup(lang, "buttons.confirm"), token=action_tokens.encode(ServicesConfirmed()))
        )
        actions.append(
            Action(label=self._catalog.lookup(lang, "buttons.back"), token=action_tokens.encode(BackToProductRequest()))
        )
        return Prompt(text=text, actions=tuple(actions))

    def _payment_selection(self, session: Session | None) -> Prompt:
        lang = self._lang(session)
        actions = [
            Action(
                label=f"{option.emoji} {self._catalog.lookup(lang, f'buttons.payment.{option.payment_id}')}",
                token=action_tokens.encode(PaymentChosen(option.payment_id)),
            )
            for option in self._catalog.payments()
        ]
        actions.append(
            Action(label=self._catalog.lookup(lang, "buttons.back"), token=action_tokens.encode(BackToServices()))
        )
        return Prompt(text=self._catalog.lookup(lang, "payment_selection"), actions=tuple(actions), columns=2)

    def _summary(self, session: Session | None) -> Prompt:
        if session is None:
            raise ValueError("Summary requires a session")
        lang = session.language
        # catalog order keeps the summary stable regardless of toggle order
        services = ", ".join(
            self._catalog.lookup(lang, f"buttons.services.{option.service_id}")
            for option in self._catalog.services()
            if option.service_id in session.selected_services
        )
        payment = (
            self._catalog.lookup(lang, f"buttons.payment.{session.payment_method}")
            if session.payment_method
            else None
        )
        params = {"vehicle": session.product_request, "services": services, "payment": payment}
        return Prompt(text=self._catalog.lookup(lang, "summary", params))

    def _operator_connect(self, session: Session | None) -> Prompt:
        if session is None:
            raise ValueError("Operator prompt requires a session")
        lang = session.language
        operator = session.assigned_operator
        params = {"manager": operator}
        link = None
        url = self._catalog.operator_link(operator) if operator else None
        if url:
            link = LinkAction(label=self._catalog.lookup(lang, "buttons.connect", params), url=url)
        return Prompt(text=self._catalog.lookup(lang, "operator_info", params), link=link)
