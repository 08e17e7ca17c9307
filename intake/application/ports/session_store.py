from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from intake.domain.entities.rate_limit import RateLimitWindow
from intake.domain.entities.session import Session


class SessionStorePort(ABC):
    @abstractmethod
    def get(self, user_id: str) -> Session | None:
        raise NotImplementedError

    @abstractmethod
    def get_or_create(self, user_id: str, now_ts: float) -> Session:
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def user_ids(self) -> list[str]:
        """Snapshot of the stored user ids, safe to iterate while deleting."""
        raise NotImplementedError

    @abstractmethod
    def lock(self, user_id: str) -> asyncio.Lock:
        """Exclusive lock guarding one session's transitions."""
        raise NotImplementedError


class RateLimitStorePort(ABC):
    @abstractmethod
    def get(self, user_id: str) -> RateLimitWindow | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, user_id: str, window: RateLimitWindow) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str) -> None:
        raise NotImplementedError
