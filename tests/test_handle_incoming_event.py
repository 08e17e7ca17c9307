import asyncio

import pytest

from intake.domain.entities.events import (
    FreeText,
    InboundEvent,
    LanguageChosen,
    PaymentChosen,
    ServicesConfirmed,
    ServiceToggled,
    StartCommand,
)
from intake.domain.entities.session import WorkflowState


def _event(event, user_id="42"):
    return InboundEvent(user_id=user_id, handle="driver", event=event)


@pytest.mark.asyncio
async def test_rate_limited_event_is_dropped_with_notice(harness):
    for _ in range(30):
        await harness.use_case.handle(_event(FreeText("spam")))
    sent_before = len(harness.platform.sent)

    await harness.use_case.handle(_event(StartCommand()))

    session = harness.sessions.get("42")
    assert session.state == WorkflowState.INIT
    assert len(harness.platform.sent) == sent_before + 1
    assert harness.platform.texts[-1] == "Please wait a moment before sending more messages."


@pytest.mark.asyncio
async def test_rate_limit_notice_uses_session_language(harness):
    await harness.use_case.handle(_event(StartCommand()))
    await harness.use_case.handle(_event(LanguageChosen("es")))
    for _ in range(28):
        await harness.use_case.handle(_event(ServiceToggled("tuning")))

    await harness.use_case.handle(_event(FreeText("hola")))

    assert harness.platform.texts[-1].startswith("Por favor, espere un momento")


@pytest.mark.asyncio
async def test_failed_transition_restores_state_and_apologizes(harness, caplog):
    await harness.use_case.handle(_event(StartCommand()))
    await harness.use_case.handle(_event(LanguageChosen("en")))
    session = harness.sessions.get("42")

    original_send = harness.platform.send
    calls = {"n": 0}

    async def flaky_send(recipient_id, prompt):
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("boom")
        return await original_send(recipient_id, prompt)

    harness.platform.send = flaky_send
    with caplog.at_level("ERROR"):
        await harness.use_case.handle(_event(FreeText("Model S red")))

    assert session.state == WorkflowState.PRODUCT_REQUEST
    assert session.product_request is None
    assert session.awaiting_keyboard_input is False
    assert harness.platform.texts[-1] == "An error occurred. Please try again later."
    assert any(r.getMessage() == "Error handling event" for r in caplog.records)

    # the same input succeeds on retry
    await harness.use_case.handle(_event(FreeText("Model S red")))
    assert session.state == WorkflowState.SERVICE_SELECTION
    assert session.product_request == "Model S red"


@pytest.mark.asyncio
async def test_concurrent_toggles_are_not_lost(harness):
    await harness.use_case.handle(_event(StartCommand()))
    await harness.use_case.handle(_event(LanguageChosen("en")))
    await harness.use_case.handle(_event(FreeText("Model X")))

    await asyncio.gather(
        harness.use_case.handle(_event(ServiceToggled("tuning"))),
        harness.use_case.handle(_event(ServiceToggled("customs"))),
        harness.use_case.handle(_event(ServiceToggled("logistics"))),
    )

    session = harness.sessions.get("42")
    assert session.selected_services == {"tuning", "customs", "logistics"}
    final_labels = [a.label for a in harness.platform.edits[-1][2].actions[1:4]]
    assert all(label.startswith("✅") for label in final_labels)


@pytest.mark.asyncio
async def test_users_have_independent_sessions(harness):
    await harness.use_case.handle(_event(StartCommand(), user_id="1"))
    await harness.use_case.handle(_event(StartCommand(), user_id="2"))
    await harness.use_case.handle(_event(LanguageChosen("uk"), user_id="2"))

    assert harness.sessions.get("1").state == WorkflowState.LANGUAGE_SELECTION
    assert harness.sessions.get("2").assigned_operator == "Vladislav"


def _assert_selector_matches_state(session):
    interactive = session.state in (WorkflowState.SERVICE_SELECTION, WorkflowState.PAYMENT_SELECTION)
    assert (session.active_selector_message_id is not None) == interactive


async def _to_services(harness):
    await harness.use_case.handle(_event(StartCommand()))
    await harness.use_case.handle(_event(LanguageChosen("en")))
    await harness.use_case.handle(_event(FreeText("Model S red")))
    return harness.sessions.get("42")


@pytest.mark.asyncio
async def test_failed_confirm_brings_back_service_selector(harness):
    session = await _to_services(harness)
    await harness.use_case.handle(_event(ServiceToggled("tuning")))
    old_selector = session.active_selector_message_id

    harness.platform.send_failures = 1
    await harness.use_case.handle(_event(ServicesConfirmed()))

    assert session.state == WorkflowState.SERVICE_SELECTION
    assert session.selected_services == {"tuning"}
    assert old_selector in harness.platform.deleted
    _assert_selector_matches_state(session)
    _, message_id, prompt = harness.platform.sent[-1]
    assert session.active_selector_message_id == message_id
    assert "confirm_services" in [action.token for action in prompt.actions]
    assert any(action.label.startswith("✅ ") for action in prompt.actions)
    assert harness.platform.texts[-2] == "An error occurred. Please try again later."

    # the restored keyboard is usable
    await harness.use_case.handle(_event(ServicesConfirmed()))
    assert session.state == WorkflowState.PAYMENT_SELECTION
    _assert_selector_matches_state(session)


@pytest.mark.asyncio
async def test_failed_payment_brings_back_payment_selector(harness):
    session = await _to_services(harness)
    await harness.use_case.handle(_event(ServiceToggled("logistics")))
    await harness.use_case.handle(_event(ServicesConfirmed()))

    harness.platform.send_failures = 1
    await harness.use_case.handle(_event(PaymentChosen("eur")))

    assert session.state == WorkflowState.PAYMENT_SELECTION
    assert session.payment_method is None
    assert session.workflow_completed is False
    assert harness.handoff.records == []
    _assert_selector_matches_state(session)
    prompt = harness.platform.last_prompt()
    assert "payment_eur" in [action.token for action in prompt.actions]


@pytest.mark.asyncio
async def test_failed_edit_fallback_keeps_a_selector_on_screen(harness):
    session = await _to_services(harness)
    old_selector = session.active_selector_message_id

    harness.platform.fail_edits = True
    harness.platform.send_failures = 1
    await harness.use_case.handle(_event(ServiceToggled("tuning")))

    assert session.state == WorkflowState.SERVICE_SELECTION
    assert session.selected_services == set()
    assert old_selector in harness.platform.deleted
    _assert_selector_matches_state(session)
    assert session.active_selector_message_id == harness.platform.sent[-1][1]

    harness.platform.fail_edits = False
    await harness.use_case.handle(_event(FreeText("hello?")))
    assert harness.platform.texts[-1] == "⚠️ Please use the menu buttons to make your selection."
    _assert_selector_matches_state(session)
