from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from intake.api import webhooks
from intake.core.config import settings
from intake.domain.entities.events import FreeText, ServiceToggled, StartCommand
from intake.main import app


class RecordingUseCase:
    def __init__(self) -> None:
        self.handled = []

    async def handle(self, inbound) -> None:
        self.handled.append(inbound)


@pytest.fixture
def use_case(monkeypatch) -> RecordingUseCase:
    recorder = RecordingUseCase()
    monkeypatch.setattr(webhooks, "get_handle_incoming_event_use_case", lambda: recorder)
    monkeypatch.setattr(webhooks, "get_telegram_client", lambda: None)
    return recorder


def _message(text: str, user_id: int = 42, chat_type: str = "private") -> dict:
    return {
        "update_id": 1,
        "message": {
            "message_id": 10,
            "chat": {"id": user_id, "type": chat_type},
            "from": {"id": user_id, "is_bot": False, "username": "driver"},
            "text": text,
        },
    }


def test_health():
    client = TestClient(app)
    assert client.get("/health").json() == {"status": "ok"}


def test_start_command_and_text(use_case):
    client = TestClient(app)

    assert client.post("/webhooks/telegram", json=_message("/start")).status_code == 200
    assert client.post("/webhooks/telegram", json=_message("BMW M5 blue")).status_code == 200

    first, second = use_case.handled
    assert first.user_id == "42"
    assert first.handle == "driver"
    assert first.event == StartCommand()
    assert second.event == FreeText("BMW M5 blue")


def test_callback_query_is_decoded(use_case):
    client = TestClient(app)
    payload = {
        "update_id": 2,
        "callback_query": {
            "id": "cb-1",
            "from": {"id": 7, "is_bot": False},
            "data": "toggle_tuning",
        },
    }

    assert client.post("/webhooks/telegram", json=payload).status_code == 200

    assert use_case.handled[0].event == ServiceToggled("tuning")
    assert use_case.handled[0].handle is None


def test_group_messages_are_ignored(use_case):
    client = TestClient(app)
    assert client.post("/webhooks/telegram", json=_message("/start", chat_type="group")).status_code == 200
    assert use_case.handled == []


def test_malformed_body_is_rejected(use_case):
    client = TestClient(app)
    resp = client.post("/webhooks/telegram", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert client.post("/webhooks/telegram", json={"message": {}}).status_code == 400


def test_secret_token_is_enforced(use_case, monkeypatch):
    monkeypatch.setattr(settings, "TELEGRAM_WEBHOOK_SECRET", "s3cret")
    client = TestClient(app)

    denied = client.post("/webhooks/telegram", json=_message("/start"))
    allowed = client.post(
        "/webhooks/telegram",
        json=_message("/start"),
        headers={"X-Telegram-Bot-Api-Secret-Token": "s3cret"},
    )

    assert denied.status_code == 403
    assert allowed.status_code == 200
    assert len(use_case.handled) == 1
