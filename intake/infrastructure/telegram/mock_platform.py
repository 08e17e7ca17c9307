from __future__ import annotations

import itertools
import logging

from intake.application.ports.message_platform import MessagePlatformPort
from intake.domain.entities.prompt import Prompt


class MockTelegramPlatform(MessagePlatformPort):
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._logger = logging.getLogger(__name__)

    async def send(self, recipient_id: str, prompt: Prompt) -> str:
        message_id = str(next(self._ids))
        self._logger.info(
            "Mock send to Telegram",
            extra={"user_id": recipient_id, "message_id": message_id, "reply_text": prompt.text},
        )
        return message_id

    async def edit(self, recipient_id: str, message_id: str, prompt: Prompt) -> None:
        self._logger.info(
            "Mock edit on Telegram",
            extra={"user_id": recipient_id, "message_id": message_id, "reply_text": prompt.text},
        )

    async def delete(self, recipient_id: str, message_id: str) -> None:
        self._logger.info("Mock delete on Telegram", extra={"user_id": recipient_id, "message_id": message_id})
