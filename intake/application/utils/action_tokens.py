from __future__ import annotations

from intake.domain.entities.events import (
    BackToProductRequest,
    BackToServices,
    LanguageChosen,
    PaymentChosen,
    ServicesConfirmed,
    ServiceToggled,
    UnrecognizedAction,
    WorkflowEvent,
)

CONFIRM_SERVICES = "confirm_services"
BACK_TO_PRODUCT_REQUEST = "back_to_product_request"
BACK_TO_SERVICES = "back_to_services"

_LANGUAGE_PREFIX = "lang_"
_TOGGLE_PREFIX = "toggle_"
_PAYMENT_PREFIX = "payment_"


def encode(event: WorkflowEvent) -> str:
    """Button token for an event carried by an inline action."""
    if isinstance(event, LanguageChosen):
        return f"{_LANGUAGE_PREFIX}{event.language_id}"
    if isinstance(event, ServiceToggled):
        return f"{_TOGGLE_PREFIX}{event.service_id}"
    if isinstance(event, PaymentChosen):
        return f"{_PAYMENT_PREFIX}{event.payment_id}"
    if isinstance(event, ServicesConfirmed):
        return CONFIRM_SERVICES
    if isinstance(event, BackToProductRequest):
        return BACK_TO_PRODUCT_REQUEST
    if isinstance(event, BackToServices):
        return BACK_TO_SERVICES
    raise ValueError(f"Event has no button token: {event!r}")


def decode(token: str | None) -> WorkflowEvent:
    token = (token or "").strip()
    if token == CONFIRM_SERVICES:
        return ServicesConfirmed()
    if token == BACK_TO_PRODUCT_REQUEST:
        return BackToProductRequest()
    if token == BACK_TO_SERVICES:
        return BackToServices()
    for prefix, factory in (
        (_LANGUAGE_PREFIX, LanguageChosen),
        (_TOGGLE_PREFIX, ServiceToggled),
        (_PAYMENT_PREFIX, PaymentChosen),
    ):
        if token.startswith(prefix) and len(token) > len(prefix):
            return factory(token[len(prefix):])
    return UnrecognizedAction(token)
