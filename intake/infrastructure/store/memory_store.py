from __future__ import annotations

import asyncio
import threading

from intake.application.ports.session_store import RateLimitStorePort, SessionStorePort
from intake.domain.entities.rate_limit import RateLimitWindow
from intake.domain.entities.session import Session


class MemorySessionStore(SessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the two dicts above

    def get(self, user_id: str) -> Session | None:
        return self._sessions.get(user_id)

    def get_or_create(self, user_id: str, now_ts: float) -> Session:
        with self._lock_lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = Session(user_id=user_id, last_activity_at=now_ts)
                self._sessions[user_id] = session
            return session

    def delete(self, user_id: str) -> None:
        with self._lock_lock:
            self._sessions.pop(user_id, None)
            self._locks.pop(user_id, None)

    def user_ids(self) -> list[str]:
        with self._lock_lock:
            return list(self._sessions.keys())

    def lock(self, user_id: str) -> asyncio.Lock:
        with self._lock_lock:
            if user_id not in self._locks:
                self._locks[user_id] = asyncio.Lock()
            return self._locks[user_id]

    def __len__(self) -> int:
        return len(self._sessions)


class MemoryRateLimitStore(RateLimitStorePort):
    def __init__(self) -> None:
        self._windows: dict[str, RateLimitWindow] = {}

    def get(self, user_id: str) -> RateLimitWindow | None:
        return self._windows.get(user_id)

    def set(self, user_id: str, window: RateLimitWindow) -> None:
        self._windows[user_id] = window

    def delete(self, user_id: str) -> None:
        self._windows.pop(user_id, None)
