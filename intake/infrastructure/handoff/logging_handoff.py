from __future__ import annotations

import logging

from intake.application.ports.operator_handoff import OperatorHandoffPort
from intake.domain.entities.handoff import HandoffRecord


class LoggingHandoff(OperatorHandoffPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def notify(self, record: HandoffRecord) -> None:
        self._logger.warning(
            "OPERATOR_CHAT_ID not set; order only logged",
            extra={"user_id": record.user_id, "reply_text": repr(record)},
        )
