from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitWindow:
    window_start: float
    count: int = 1
