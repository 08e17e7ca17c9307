from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HandoffRecord:
    user_id: str
    handle: str | None
    language: str | None
    product_request: str | None
    services: tuple[str, ...]
    payment_method: str | None
    operator: str | None = None
