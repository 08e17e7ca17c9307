from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from intake.application.dto.telegram_update import parse_update
from intake.application.use_cases.handle_incoming_event import HandleIncomingEventUseCase
from intake.infrastructure.telegram.telegram_client import TelegramClient, TelegramClientError


class UpdatePoller:
    """Long-polling loop over getUpdates; each update is handled in its own task."""

    def __init__(
        self,
        client: TelegramClient,
        use_case: HandleIncomingEventUseCase,
        poll_timeout: int = 30,
        error_delay_seconds: float = 5.0,
    ) -> None:
        self._client = client
        self._use_case = use_case
        self._poll_timeout = poll_timeout
        self._error_delay = error_delay_seconds
        self._offset: int | None = None
        self._task: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()
        self._logger = logging.getLogger(__name__)

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run(), name="telegram-poller")
        self._logger.info("Telegram long polling started")

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            finally:
                self._task = None
        # handlers still running may be sending through the shared client
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def poll_once(self) -> int:
        updates = await self._client.get_updates(self._offset, self._poll_timeout)
        for payload in updates:
            update_id = payload.get("update_id")
            if isinstance(update_id, int):
                self._offset = update_id + 1
            try:
                update = parse_update(payload)
            except ValidationError:
                self._logger.warning("Skipping malformed update", extra={"reason": f"update_id={update_id}"})
                continue
            if update.callback_query_id:
                await self._acknowledge(update.callback_query_id)
            inbound = update.extract_event()
            if inbound is None:
                continue
            task = asyncio.create_task(self._use_case.handle(inbound))
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
        return len(updates)

    async def _acknowledge(self, callback_query_id: str) -> None:
        try:
            await self._client.answer_callback_query(callback_query_id)
        except TelegramClientError as e:
            self._logger.info("Callback query not answered", extra={"reason": str(e)})

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
            except TelegramClientError as e:
                self._logger.warning("getUpdates failed", extra={"reason": str(e)})
                await asyncio.sleep(self._error_delay)
