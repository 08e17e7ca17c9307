from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from intake.application.exceptions import TransportError


class TelegramClientError(TransportError):
    pass


class TelegramClient:
    """Async Telegram Bot API client mapping failures to TelegramClientError."""

    def __init__(self, token: str, base_url: str = "https://api.telegram.org", timeout: float = 10.0) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send_message(
        self, chat_id: str, text: str, reply_markup: Mapping[str, Any] | None = None
    ) -> Mapping[str, Any]:
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return await self._request("sendMessage", payload)

    async def edit_message_text(
        self, chat_id: str, message_id: str, text: str, reply_markup: Mapping[str, Any] | None = None
    ) -> Mapping[str, Any]:
        payload: dict[str, Any] = {"chat_id": chat_id, "message_id": int(message_id), "text": text}
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return await self._request("editMessageText", payload)

    async def delete_message(self, chat_id: str, message_id: str) -> Any:
        return await self._request("deleteMessage", {"chat_id": chat_id, "message_id": int(message_id)})

    async def answer_callback_query(self, callback_query_id: str) -> Any:
        return await self._request("answerCallbackQuery", {"callback_query_id": callback_query_id})

    async def set_my_description(self, description: str) -> Any:
        return await self._request("setMyDescription", {"description": description})

    async def get_updates(self, offset: int | None, timeout: int) -> list[dict[str, Any]]:
        payload: dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message", "callback_query"]}
        if offset is not None:
            payload["offset"] = offset
        result = await self._request("getUpdates", payload, timeout=timeout + 10.0)
        return list(result or [])

    async def _request(self, method: str, payload: Mapping[str, Any], timeout: float | None = None) -> Any:
        url = f"{self._base_url}/bot{self._token}/{method}"
        try:
            if timeout is None:
                resp = await self._client.post(url, json=payload)
            else:
                resp = await self._client.post(url, json=payload, timeout=timeout)
        except httpx.RequestError as e:
            raise TelegramClientError(str(e) or type(e).__name__, code="NETWORK_FAILURE") from e

        try:
            data = resp.json()
        except ValueError:
            data = {"ok": False, "description": resp.text}

        if resp.status_code >= 400 or not data.get("ok"):
            description = str(data.get("description") or f"telegram error {resp.status_code}")
            self._logger.warning(
                "Telegram request failed",
                extra={"reason": f"{method}: {resp.status_code} {description}"},
            )
            raise TelegramClientError(description, code=_error_code(resp.status_code, description), status_code=resp.status_code)
        return data.get("result")


def _error_code(status_code: int, description: str) -> str:
    lowered = description.lower()
    if status_code in (401, 403) or "unauthorized" in lowered:
        return "BOT_FORBIDDEN"
    if status_code == 429:
        return "RATE_LIMIT"
    if "message is not modified" in lowered:
        return "NOT_MODIFIED"
    if "message to delete not found" in lowered or "message to edit not found" in lowered:
        return "MESSAGE_NOT_FOUND"
    if "chat not found" in lowered:
        return "CHAT_NOT_FOUND"
    return "TELEGRAM_ERROR"
