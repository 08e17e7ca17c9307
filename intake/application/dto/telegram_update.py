from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from intake.application.utils import action_tokens
from intake.domain.entities.events import FreeText, InboundEvent, StartCommand, WorkflowEvent


class TelegramUser(BaseModel):
    id: int
    is_bot: bool = False
    username: str | None = None
    first_name: str | None = None


class TelegramChat(BaseModel):
    id: int
    type: str = "private"


class TelegramMessage(BaseModel):
    message_id: int
    chat: TelegramChat
    from_user: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None


class TelegramCallbackQuery(BaseModel):
    id: str
    from_user: TelegramUser = Field(alias="from")
    message: TelegramMessage | None = None
    data: str | None = None


class TelegramUpdateDTO(BaseModel):
    update_id: int
    message: TelegramMessage | None = None
    callback_query: TelegramCallbackQuery | None = None

    def extract_event(self) -> InboundEvent | None:
        """Decode the update once into a typed event; None for updates the bot ignores."""
        if self.callback_query is not None:
            user = self.callback_query.from_user
            if user.is_bot:
                return None
            return InboundEvent(
                user_id=str(user.id),
                handle=user.username,
                event=action_tokens.decode(self.callback_query.data),
                update_id=self.update_id,
            )

        message = self.message
        if message is None or message.from_user is None or message.text is None:
            return None
        if message.from_user.is_bot or message.chat.type != "private":
            return None
        return InboundEvent(
            user_id=str(message.from_user.id),
            handle=message.from_user.username,
            event=_text_event(message.text),
            update_id=self.update_id,
        )

    @property
    def callback_query_id(self) -> str | None:
        return self.callback_query.id if self.callback_query is not None else None


def _text_event(text: str) -> WorkflowEvent:
    command = text.strip().split(maxsplit=1)[0] if text.strip() else ""
    # "/start@SomeBot" is how group clients address a bot
    if command.split("@", 1)[0] == "/start":
        return StartCommand()
    return FreeText(text)


def parse_update(payload: dict[str, Any]) -> TelegramUpdateDTO:
    return TelegramUpdateDTO.model_validate(payload)
