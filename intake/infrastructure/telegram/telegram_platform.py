from __future__ import annotations

from typing import Any

from intake.application.ports.message_platform import MessagePlatformPort
from intake.domain.entities.prompt import Prompt
from intake.infrastructure.telegram.telegram_client import TelegramClient, TelegramClientError


class TelegramPlatform(MessagePlatformPort):
    def __init__(self, client: TelegramClient) -> None:
        self._client = client

    async def send(self, recipient_id: str, prompt: Prompt) -> str:
        result = await self._client.send_message(recipient_id, prompt.text, build_inline_keyboard(prompt))
        return str(result["message_id"])

    async def edit(self, recipient_id: str, message_id: str, prompt: Prompt) -> None:
        try:
            await self._client.edit_message_text(recipient_id, message_id, prompt.text, build_inline_keyboard(prompt))
        except TelegramClientError as e:
            # the message already shows this text and keyboard
            if e.code != "NOT_MODIFIED":
                raise

    async def delete(self, recipient_id: str, message_id: str) -> None:
        await self._client.delete_message(recipient_id, message_id)


def build_inline_keyboard(prompt: Prompt) -> dict[str, Any] | None:
    if not prompt.is_interactive:
        return None
    columns = max(1, prompt.columns)
    buttons = [{"text": action.label, "callback_data": action.token} for action in prompt.actions]
    rows = [buttons[i : i + columns] for i in range(0, len(buttons), columns)]
    if prompt.link is not None:
        rows.append([{"text": prompt.link.label, "url": prompt.link.url}])
    return {"inline_keyboard": rows}
