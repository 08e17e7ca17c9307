from __future__ import annotations

import logging
from typing import Awaitable, Callable

from intake.application.ports.catalog import CatalogPort
from intake.application.ports.message_platform import MessagePlatformPort
from intake.application.ports.operator_handoff import OperatorHandoffPort
from intake.application.use_cases.build_prompt import PromptBuilder, PromptKind
from intake.application.use_cases.message_ledger import MessageLedger
from intake.domain.entities.events import (
    BackToProductRequest,
    BackToServices,
    FreeText,
    LanguageChosen,
    PaymentChosen,
    ServicesConfirmed,
    ServiceToggled,
    StartCommand,
    WorkflowEvent,
)
from intake.domain.entities.handoff import HandoffRecord
from intake.domain.entities.session import Session, WorkflowState

Handler = Callable[[Session, WorkflowEvent], Awaitable[None]]


class WorkflowStateMachine:
    """
    Intake flow: INIT -> LANGUAGE_SELECTION -> PRODUCT_REQUEST ->
    SERVICE_SELECTION <-> PAYMENT_SELECTION -> COMPLETED.

    Button events are only honoured in the state that offered them; anything
    else (stale keyboards, unknown ids) is dropped without a reply.
    """

    def __init__(
        self,
        platform: MessagePlatformPort,
        ledger: MessageLedger,
        prompts: PromptBuilder,
        catalog: CatalogPort,
        handoff: OperatorHandoffPort,
    ) -> None:
        self._platform = platform
        self._ledger = ledger
        self._prompts = prompts
        self._catalog = catalog
        self._handoff = handoff
        self._logger = logging.getLogger(__name__)
        self._transitions: dict[tuple[WorkflowState, type], Handler] = {
            (WorkflowState.LANGUAGE_SELECTION, LanguageChosen): self._on_language_chosen,
            (WorkflowState.SERVICE_SELECTION, ServiceToggled): self._on_service_toggled,
            (WorkflowState.SERVICE_SELECTION, ServicesConfirmed): self._on_services_confirmed,
            (WorkflowState.SERVICE_SELECTION, BackToProductRequest): self._on_back_to_product_request,
            (WorkflowState.PAYMENT_SELECTION, PaymentChosen): self._on_payment_chosen,
            (WorkflowState.PAYMENT_SELECTION, BackToServices): self._on_back_to_services,
        }

    async def dispatch(self, session: Session, event: WorkflowEvent) -> None:
        if isinstance(event, StartCommand):
            await self._on_start(session)
            return
        if isinstance(event, FreeText):
            await self._on_free_text(session, event)
            return

        handler = self._transitions.get((session.state, type(event)))
        if handler is None:
            self._logger.debug(
                "Ignoring action",
                extra={"user_id": session.user_id, "state": session.state.value, "event": repr(event)},
            )
            return
        await handler(session, event)

    async def _send(self, session: Session, kind: PromptKind) -> str:
        return await self._platform.send(session.user_id, self._prompts.build(kind, session))

    async def _send_ephemeral(self, session: Session, kind: PromptKind) -> str:
        message_id = await self._send(session, kind)
        self._ledger.mark_ephemeral(session, message_id)
        return message_id

    async def _send_selector(self, session: Session, kind: PromptKind) -> str:
        message_id = await self._send(session, kind)
        self._ledger.set_active_selector(session, message_id)
        return message_id

    async def _on_start(self, session: Session) -> None:
        await self._ledger.retract_all(session, include_active_selector=True)
        session.reset()

        for prompt in self._prompts.build_welcome():
            await self._platform.send(session.user_id, prompt)
        await self._send_ephemeral(session, PromptKind.LANGUAGE_SELECTION)
        session.awaiting_keyboard_input = True
        session.state = WorkflowState.LANGUAGE_SELECTION

    async def _on_language_chosen(self, session: Session, event: LanguageChosen) -> None:
        option = self._catalog.get_language(event.language_id)
        if option is None:
            return
        session.language = option.language_id
        session.assigned_operator = option.operator
        session.awaiting_keyboard_input = False
        session.state = WorkflowState.PRODUCT_REQUEST
        await self._send_ephemeral(session, PromptKind.PRODUCT_REQUEST)

    async def _on_free_text(self, session: Session, event: FreeText) -> None:
        if session.workflow_completed:
            # kept on screen on purpose, not tracked
            await self._send(session, PromptKind.CLOSING_NOTE)
            return
        if session.awaiting_keyboard_input:
            await self._send_ephemeral(session, PromptKind.USE_BUTTONS_WARNING)
            return
        if session.language is None or session.state != WorkflowState.PRODUCT_REQUEST:
            return

        session.product_request = event.text
        session.awaiting_keyboard_input = True
        session.state = WorkflowState.SERVICE_SELECTION
        await self._send_selector(session, PromptKind.SERVICE_SELECTION)

    async def _on_service_toggled(self, session: Session, event: ServiceToggled) -> None:
        if self._catalog.get_service(event.service_id) is None:
            return
        if event.service_id in session.selected_services:
            session.selected_services.discard(event.service_id)
        else:
            session.selected_services.add(event.service_id)
        prompt = self._prompts.build(PromptKind.SERVICE_SELECTION, session)
        await self._ledger.replace_active_selector(session, prompt)

    async def _on_services_confirmed(self, session: Session, event: ServicesConfirmed) -> None:
        if not session.selected_services:
            await self._send_ephemeral(session, PromptKind.NO_SERVICES_WARNING)
            return
        await self._ledger.retract_active_selector(session)
        session.awaiting_keyboard_input = True
        session.state = WorkflowState.PAYMENT_SELECTION
        await self._send_selector(session, PromptKind.PAYMENT_SELECTION)

    async def _on_back_to_product_request(self, session: Session, event: BackToProductRequest) -> None:
        session.selected_services = set()
        session.payment_method = None
        session.awaiting_keyboard_input = False
        await self._ledger.retract_active_selector(session)
        session.state = WorkflowState.PRODUCT_REQUEST
        await self._send_ephemeral(session, PromptKind.PRODUCT_REQUEST)

    async def _on_back_to_services(self, session: Session, event: BackToServices) -> None:
        session.payment_method = None
        session.awaiting_keyboard_input = True
        await self._ledger.retract_active_selector(session)
        session.state = WorkflowState.SERVICE_SELECTION
        await self._send_selector(session, PromptKind.SERVICE_SELECTION)

    async def _on_payment_chosen(self, session: Session, event: PaymentChosen) -> None:
        if self._catalog.get_payment(event.payment_id) is None:
            return
        session.payment_method = event.payment_id
        await self._ledger.retract_active_selector(session)

        await self._send_ephemeral(session, PromptKind.SUMMARY)
        await self._notify_operator(session)
        await self._send_ephemeral(session, PromptKind.OPERATOR_CONNECT)
        await self._send_ephemeral(session, PromptKind.CLOSING_NOTE)

        session.workflow_completed = True
        session.state = WorkflowState.COMPLETED
        self._logger.info("Intake completed", extra={"user_id": session.user_id, "language": session.language})

    async def _notify_operator(self, session: Session) -> None:
        record = HandoffRecord(
            user_id=session.user_id,
            handle=session.handle,
            language=session.language,
            product_request=session.product_request,
            services=tuple(
                option.service_id for option in self._catalog.services() if option.service_id in session.selected_services
            ),
            payment_method=session.payment_method,
            operator=session.assigned_operator,
        )
        try:
            await self._handoff.notify(record)
        except Exception as e:
            self._logger.error(
                "Operator handoff failed",
                extra={"user_id": session.user_id, "reason": str(e)},
            )
