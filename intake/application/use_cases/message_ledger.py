from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from intake.application.exceptions import TransportError
from intake.application.ports.message_platform import MessagePlatformPort
from intake.domain.entities.prompt import Prompt
from intake.domain.entities.session import Session


@dataclass(frozen=True)
class RetryPolicy:
    batch_size: int = 5
    batch_delay_seconds: float = 1.0
    max_attempts: int = 3
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 10.0
    jitter: bool = False

    def backoff(self, failed_attempts: int) -> float:
        """Delay before the next attempt: base doubled per failure, capped."""
        delay = min(self.backoff_base_seconds * (2 ** failed_attempts), self.backoff_max_seconds)
        if self.jitter:
            delay = random.uniform(delay / 2, delay)
        return delay


@dataclass
class RetractionReport:
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class MessageLedger:
    """
    Track which outbound messages must be retracted before the next prompt,
    and keep the single active selector message up to date.

    Deletion is best effort: a message that cannot be deleted after the
    configured attempts is logged and skipped.
    """

    def __init__(
        self,
        platform: MessagePlatformPort,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._platform = platform
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._logger = logging.getLogger(__name__)

    def mark_ephemeral(self, session: Session, message_id: str) -> None:
        session.pending_retraction_ids.append(message_id)

    def set_active_selector(self, session: Session, message_id: str | None) -> None:
        session.active_selector_message_id = message_id

    async def retract_all(self, session: Session, include_active_selector: bool = False) -> RetractionReport:
        message_ids = list(session.pending_retraction_ids)
        session.pending_retraction_ids = []
        if include_active_selector and session.active_selector_message_id:
            message_ids.append(session.active_selector_message_id)
            session.active_selector_message_id = None
        return await self.delete_messages(session.user_id, message_ids)

    async def retract_active_selector(self, session: Session) -> bool:
        message_id = session.active_selector_message_id
        if not message_id:
            return True
        session.active_selector_message_id = None
        report = await self.delete_messages(session.user_id, [message_id])
        return not report.failed

    async def replace_active_selector(self, session: Session, prompt: Prompt) -> bool:
        """
        Edit the active selector in place. Falls back to sending a new message
        (after a best-effort delete of the old one) when the edit fails.
        Returns True only if the message was edited in place.
        """
        message_id = session.active_selector_message_id
        if message_id:
            try:
                await self._platform.edit(session.user_id, message_id, prompt)
                return True
            except TransportError as e:
                self._logger.warning(
                    "Failed to edit selector, sending a new one",
                    extra={"user_id": session.user_id, "message_id": message_id, "reason": str(e)},
                )
            session.active_selector_message_id = None
            await self._delete_once(session.user_id, message_id)

        new_id = await self._platform.send(session.user_id, prompt)
        self.set_active_selector(session, new_id)
        return False

    async def delete_messages(self, recipient_id: str, message_ids: list[str]) -> RetractionReport:
        report = RetractionReport()
        if not message_ids:
            return report

        size = max(1, self._policy.batch_size)
        batches = [message_ids[i : i + size] for i in range(0, len(message_ids), size)]
        for index, batch in enumerate(batches):
            results = await asyncio.gather(*(self._delete_with_retry(recipient_id, mid) for mid in batch))
            for message_id, ok in zip(batch, results):
                (report.deleted if ok else report.failed).append(message_id)
            if index < len(batches) - 1:
                await self._sleep(self._policy.batch_delay_seconds)

        if report.failed:
            self._logger.warning(
                "Some messages could not be retracted",
                extra={"user_id": recipient_id, "reason": f"failed={len(report.failed)} deleted={len(report.deleted)}"},
            )
        return report

    async def _delete_with_retry(self, recipient_id: str, message_id: str) -> bool:
        attempts = max(1, self._policy.max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                await self._platform.delete(recipient_id, message_id)
                return True
            except TransportError as e:
                if attempt == attempts:
                    self._logger.error(
                        "Failed to delete message after retries",
                        extra={"user_id": recipient_id, "message_id": message_id, "attempt": attempt, "reason": str(e)},
                    )
                    return False
                self._logger.info(
                    "Delete failed, retrying",
                    extra={"user_id": recipient_id, "message_id": message_id, "attempt": attempt, "reason": str(e)},
                )
                await self._sleep(self._policy.backoff(attempt))
        return False

    async def _delete_once(self, recipient_id: str, message_id: str) -> None:
        try:
            await self._platform.delete(recipient_id, message_id)
        except TransportError as e:
            self._logger.info(
                "Stale selector not deleted",
                extra={"user_id": recipient_id, "message_id": message_id, "reason": str(e)},
            )
