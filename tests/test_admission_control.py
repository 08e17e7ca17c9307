import asyncio

import pytest

from intake.application.use_cases.admission_control import AdmissionControl, SessionSweeper
from intake.infrastructure.store.memory_store import MemoryRateLimitStore, MemorySessionStore


def _admission(clock, max_messages: int = 30) -> tuple[AdmissionControl, MemorySessionStore, MemoryRateLimitStore]:
    sessions = MemorySessionStore()
    rate_limits = MemoryRateLimitStore()
    admission = AdmissionControl(sessions, rate_limits, window_seconds=60.0, max_messages=max_messages, clock=clock)
    return admission, sessions, rate_limits


def test_ceiling_within_one_window(clock):
    admission, _, _ = _admission(clock)

    results = [admission.check_and_record("u1") for _ in range(30)]
    assert all(results)
    assert admission.check_and_record("u1") is False
    # other users are unaffected
    assert admission.check_and_record("u2") is True


def test_window_resets_after_duration(clock):
    admission, _, rate_limits = _admission(clock, max_messages=3)
    for _ in range(3):
        assert admission.check_and_record("u1")
    assert not admission.check_and_record("u1")

    clock.advance(60.0)
    assert not admission.check_and_record("u1")  # exactly the window duration is still inside

    clock.advance(0.5)
    assert admission.check_and_record("u1")
    assert rate_limits.get("u1").count == 1


def test_touch_creates_and_refreshes_session(clock):
    admission, sessions, _ = _admission(clock)

    session = admission.touch("u1", handle="alice")
    assert session.handle == "alice"
    assert session.last_activity_at == clock.now

    clock.advance(10)
    again = admission.touch("u1")
    assert again is session
    assert again.last_activity_at == clock.now
    assert again.handle == "alice"
    assert len(sessions) == 1


def test_sweep_removes_only_expired_sessions(clock):
    admission, sessions, rate_limits = _admission(clock)
    admission.touch("old")
    admission.check_and_record("old")
    clock.advance(6 * 24 * 3600)
    admission.touch("recent")
    admission.check_and_record("recent")
    clock.advance(2 * 24 * 3600)

    removed = admission.sweep()

    assert removed == 1
    assert sessions.get("old") is None
    assert rate_limits.get("old") is None
    assert sessions.get("recent") is not None
    assert rate_limits.get("recent") is not None


@pytest.mark.asyncio
async def test_sweeper_runs_periodically(clock):
    admission, sessions, _ = _admission(clock)
    admission.touch("old")
    clock.advance(8 * 24 * 3600)

    sweeper = SessionSweeper(admission, interval_seconds=0.01)
    await sweeper.start()
    await sweeper.start()  # idempotent
    for _ in range(50):
        if sessions.get("old") is None:
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert sessions.get("old") is None
    assert sweeper.running is False
