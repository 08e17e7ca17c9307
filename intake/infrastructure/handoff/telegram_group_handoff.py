from __future__ import annotations

import logging

from intake.application.ports.catalog import CatalogPort
from intake.application.ports.operator_handoff import OperatorHandoffPort
from intake.domain.entities.handoff import HandoffRecord
from intake.infrastructure.telegram.telegram_client import TelegramClient


class TelegramGroupHandoff(OperatorHandoffPort):
    """Post completed orders into the operators' group chat."""

    def __init__(self, client: TelegramClient, chat_id: str, catalog: CatalogPort) -> None:
        self._client = client
        self._chat_id = chat_id
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    async def notify(self, record: HandoffRecord) -> None:
        await self._client.send_message(self._chat_id, format_order(record, self._catalog))
        self._logger.info("Order sent to operators", extra={"user_id": record.user_id})


def format_order(record: HandoffRecord, catalog: CatalogPort) -> str:
    language = catalog.get_language(record.language) if record.language else None
    payment = catalog.get_payment(record.payment_method) if record.payment_method else None
    services = ", ".join(
        option.label for option in (catalog.get_service(sid) for sid in record.services) if option is not None
    )
    payment_label = f"{payment.emoji} {payment.label}" if payment else "Not specified"
    return (
        "🚗 New Order Details:\n"
        f"👤 User: @{record.handle or 'No username'}\n"
        f"🌐 Language: {language.label if language else 'Not specified'}\n"
        f"🚘 Car request: {record.product_request or 'Not specified'}\n"
        f"🛠 Services: {services}\n"
        f"💳 Payment: {payment_label}"
    )
