from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable

from intake.application.ports.session_store import RateLimitStorePort, SessionStorePort
from intake.domain.entities.rate_limit import RateLimitWindow
from intake.domain.entities.session import Session


class AdmissionControl:
    """Per-user sliding-window rate limiting plus idle-session expiry."""

    def __init__(
        self,
        sessions: SessionStorePort,
        rate_limits: RateLimitStorePort,
        window_seconds: float = 60.0,
        max_messages: int = 30,
        expiry_seconds: float = 7 * 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._sessions = sessions
        self._rate_limits = rate_limits
        self._window_seconds = window_seconds
        self._max_messages = max_messages
        self._expiry_seconds = expiry_seconds
        self._clock = clock
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, user_id: str) -> threading.Lock:
        with self._lock_lock:
            if user_id not in self._locks:
                self._locks[user_id] = threading.Lock()
            return self._locks[user_id]

    def check_and_record(self, user_id: str) -> bool:
        """Returns True if the event is admitted. Counting and window reset are one atomic step."""
        now = self._clock()
        with self._get_lock(user_id):
            window = self._rate_limits.get(user_id)
            if window is None or now - window.window_start > self._window_seconds:
                self._rate_limits.set(user_id, RateLimitWindow(window_start=now, count=1))
                return True
            if window.count >= self._max_messages:
                self._logger.info("Rate limit exceeded", extra={"user_id": user_id, "reason": f"count={window.count}"})
                return False
            self._rate_limits.set(user_id, RateLimitWindow(window_start=window.window_start, count=window.count + 1))
            return True

    def touch(self, user_id: str, handle: str | None = None) -> Session:
        now = self._clock()
        session = self._sessions.get_or_create(user_id, now)
        session.last_activity_at = now
        if handle:
            session.handle = handle
        return session

    def sweep(self) -> int:
        """Remove sessions idle longer than the expiry, with their rate-limit windows."""
        now = self._clock()
        removed = 0
        for user_id in self._sessions.user_ids():
            session = self._sessions.get(user_id)
            if session is None or now - session.last_activity_at <= self._expiry_seconds:
                continue
            self._sessions.delete(user_id)
            self._rate_limits.delete(user_id)
            with self._lock_lock:
                self._locks.pop(user_id, None)
            removed += 1
        if removed:
            self._logger.info("Cleaned up %s inactive user sessions", removed)
        return removed


class SessionSweeper:
    """Background task that runs AdmissionControl.sweep on a fixed period."""

    def __init__(self, admission: AdmissionControl, interval_seconds: float = 24 * 60 * 60) -> None:
        self._admission = admission
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._logger = logging.getLogger(__name__)

    @property
    def running(self) -> bool:
        return self._task is not None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run(), name="session-sweeper")
        self._logger.info("Session sweeper started", extra={"reason": f"interval={self._interval}s"})

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        finally:
            self._task = None

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                try:
                    self._admission.sweep()
                except Exception:
                    self._logger.exception("Session sweep failed")
