from __future__ import annotations

import logging

from intake.application.exceptions import TransportError
from intake.application.ports.message_platform import MessagePlatformPort
from intake.application.ports.session_store import SessionStorePort
from intake.application.use_cases.admission_control import AdmissionControl
from intake.application.use_cases.build_prompt import PromptBuilder, PromptKind
from intake.application.use_cases.message_ledger import MessageLedger
from intake.application.use_cases.workflow import WorkflowStateMachine
from intake.domain.entities.events import InboundEvent, StartCommand
from intake.domain.entities.session import Session, WorkflowState

_SELECTOR_KINDS = {
    WorkflowState.SERVICE_SELECTION: PromptKind.SERVICE_SELECTION,
    WorkflowState.PAYMENT_SELECTION: PromptKind.PAYMENT_SELECTION,
}


class HandleIncomingEventUseCase:
    def __init__(
        self,
        sessions: SessionStorePort,
        admission: AdmissionControl,
        ledger: MessageLedger,
        workflow: WorkflowStateMachine,
        prompts: PromptBuilder,
        platform: MessagePlatformPort,
    ) -> None:
        self._sessions = sessions
        self._admission = admission
        self._ledger = ledger
        self._workflow = workflow
        self._prompts = prompts
        self._platform = platform
        self._logger = logging.getLogger(__name__)

    async def handle(self, inbound: InboundEvent) -> None:
        user_id = inbound.user_id
        if not self._admission.check_and_record(user_id):
            await self._notify(user_id, PromptKind.RATE_LIMITED, self._sessions.get(user_id))
            return

        session = self._admission.touch(user_id, inbound.handle)
        async with self._sessions.lock(user_id):
            await self._run_transition(session, inbound)

    async def _run_transition(self, session: Session, inbound: InboundEvent) -> None:
        event = inbound.event
        snapshot = session.snapshot()
        try:
            if not isinstance(event, StartCommand) and not session.awaiting_keyboard_input:
                await self._ledger.retract_all(session)
            await self._workflow.dispatch(session, event)
        except Exception:
            self._logger.exception(
                "Error handling event",
                extra={
                    "user_id": session.user_id,
                    "state": snapshot.state.value,
                    "event": type(event).__name__,
                },
            )
            session.restore(snapshot)
            await self._notify(session.user_id, PromptKind.GENERIC_ERROR, session)
            await self._restore_selector(session)

    async def _restore_selector(self, session: Session) -> None:
        """Bring the on-screen selector back in line with the restored state."""
        kind = _SELECTOR_KINDS.get(session.state)
        try:
            if kind is None:
                await self._ledger.retract_active_selector(session)
            else:
                await self._ledger.replace_active_selector(session, self._prompts.build(kind, session))
        except TransportError as e:
            self._logger.error(
                "Failed to restore selector",
                extra={"user_id": session.user_id, "state": session.state.value, "reason": str(e)},
            )

    async def _notify(self, user_id: str, kind: PromptKind, session: Session | None) -> None:
        try:
            await self._platform.send(user_id, self._prompts.build(kind, session))
        except TransportError as e:
            self._logger.error("Failed to send notice", extra={"user_id": user_id, "reason": str(e)})
