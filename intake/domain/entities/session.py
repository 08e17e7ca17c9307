from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class WorkflowState(str, Enum):
    INIT = "init"
    LANGUAGE_SELECTION = "language_selection"
    PRODUCT_REQUEST = "product_request"
    SERVICE_SELECTION = "service_selection"
    PAYMENT_SELECTION = "payment_selection"
    COMPLETED = "completed"


@dataclass(frozen=True)
class WorkflowSnapshot:
    """Copy of the collected answers, used to roll back a failed transition."""

    state: WorkflowState
    language: str | None
    assigned_operator: str | None
    product_request: str | None
    selected_services: frozenset[str]
    payment_method: str | None
    awaiting_keyboard_input: bool
    workflow_completed: bool


@dataclass
class Session:
    user_id: str
    last_activity_at: float
    handle: str | None = None
    state: WorkflowState = WorkflowState.INIT
    language: str | None = None
    assigned_operator: str | None = None
    product_request: str | None = None
    selected_services: set[str] = field(default_factory=set)
    payment_method: str | None = None
    # message tracking, owned by MessageLedger
    active_selector_message_id: str | None = None
    pending_retraction_ids: list[str] = field(default_factory=list)
    awaiting_keyboard_input: bool = False
    workflow_completed: bool = False

    def reset(self) -> None:
        """Return the session to defaults, keeping identity and liveness."""
        self.state = WorkflowState.INIT
        self.language = None
        self.assigned_operator = None
        self.product_request = None
        self.selected_services = set()
        self.payment_method = None
        self.active_selector_message_id = None
        self.pending_retraction_ids = []
        self.awaiting_keyboard_input = False
        self.workflow_completed = False

    def snapshot(self) -> WorkflowSnapshot:
        return WorkflowSnapshot(
            state=self.state,
            language=self.language,
            assigned_operator=self.assigned_operator,
            product_request=self.product_request,
            selected_services=frozenset(self.selected_services),
            payment_method=self.payment_method,
            awaiting_keyboard_input=self.awaiting_keyboard_input,
            workflow_completed=self.workflow_completed,
        )

    def restore(self, snapshot: WorkflowSnapshot) -> None:
        # message tracking fields are left alone: they mirror what the transport holds
        self.state = snapshot.state
        self.language = snapshot.language
        self.assigned_operator = snapshot.assigned_operator
        self.product_request = snapshot.product_request
        self.selected_services = set(snapshot.selected_services)
        self.payment_method = snapshot.payment_method
        self.awaiting_keyboard_input = snapshot.awaiting_keyboard_input
        self.workflow_completed = snapshot.workflow_completed
