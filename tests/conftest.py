from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from intake.application.exceptions import TransportError
from intake.application.ports.message_platform import MessagePlatformPort
from intake.application.ports.operator_handoff import OperatorHandoffPort
from intake.application.use_cases.admission_control import AdmissionControl
from intake.application.use_cases.build_prompt import PromptBuilder
from intake.application.use_cases.handle_incoming_event import HandleIncomingEventUseCase
from intake.application.use_cases.message_ledger import MessageLedger, RetryPolicy
from intake.application.use_cases.workflow import WorkflowStateMachine
from intake.domain.entities.handoff import HandoffRecord
from intake.domain.entities.prompt import Prompt
from intake.infrastructure.knowledge.catalog_store import CatalogStore
from intake.infrastructure.store.memory_store import MemoryRateLimitStore, MemorySessionStore


class FakePlatform(MessagePlatformPort):
    """Records every call; failures are scripted per message id."""

    def __init__(self) -> None:
        self._next_id = 100
        self.sent: list[tuple[str, str, Prompt]] = []
        self.edits: list[tuple[str, str, Prompt]] = []
        self.deleted: list[str] = []
        self.delete_attempts: dict[str, int] = {}
        self.delete_failures: dict[str, int] = {}  # message id -> failures before success
        self.fail_edits = False
        self.fail_sends = False
        self.send_failures = 0  # fail only the next n sends

    async def send(self, recipient_id: str, prompt: Prompt) -> str:
        if self.fail_sends:
            raise TransportError("send failed")
        if self.send_failures:
            self.send_failures -= 1
            raise TransportError("send failed")
        self._next_id += 1
        message_id = str(self._next_id)
        self.sent.append((recipient_id, message_id, prompt))
        return message_id

    async def edit(self, recipient_id: str, message_id: str, prompt: Prompt) -> None:
        if self.fail_edits:
            raise TransportError("message to edit not found")
        self.edits.append((recipient_id, message_id, prompt))

    async def delete(self, recipient_id: str, message_id: str) -> None:
        self.delete_attempts[message_id] = self.delete_attempts.get(message_id, 0) + 1
        remaining = self.delete_failures.get(message_id, 0)
        if remaining:
            self.delete_failures[message_id] = remaining - 1
            raise TransportError("delete failed")
        self.deleted.append(message_id)

    @property
    def texts(self) -> list[str]:
        return [prompt.text for _, _, prompt in self.sent]

    def last_prompt(self) -> Prompt:
        return self.sent[-1][2]


class FakeHandoff(OperatorHandoffPort):
    def __init__(self, fail: bool = False) -> None:
        self.records: list[HandoffRecord] = []
        self.fail = fail

    async def notify(self, record: HandoffRecord) -> None:
        self.records.append(record)
        if self.fail:
            raise RuntimeError("operator chat unreachable")


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class Sleeps:
    delays: list[float] = field(default_factory=list)

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@dataclass
class Harness:
    platform: FakePlatform
    handoff: FakeHandoff
    clock: FakeClock
    sleeps: Sleeps
    catalog: CatalogStore
    sessions: MemorySessionStore
    rate_limits: MemoryRateLimitStore
    admission: AdmissionControl
    ledger: MessageLedger
    prompts: PromptBuilder
    workflow: WorkflowStateMachine
    use_case: HandleIncomingEventUseCase


@pytest.fixture
def catalog() -> CatalogStore:
    return CatalogStore()


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def sleeps() -> Sleeps:
    return Sleeps()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def harness(catalog: CatalogStore, platform: FakePlatform, sleeps: Sleeps, clock: FakeClock) -> Harness:
    handoff = FakeHandoff()
    sessions = MemorySessionStore()
    rate_limits = MemoryRateLimitStore()
    admission = AdmissionControl(sessions, rate_limits, clock=clock)
    ledger = MessageLedger(platform, RetryPolicy(), sleep=sleeps)
    prompts = PromptBuilder(catalog)
    workflow = WorkflowStateMachine(platform, ledger, prompts, catalog, handoff)
    use_case = HandleIncomingEventUseCase(sessions, admission, ledger, workflow, prompts, platform)
    return Harness(
        platform=platform,
        handoff=handoff,
        clock=clock,
        sleeps=sleeps,
        catalog=catalog,
        sessions=sessions,
        rate_limits=rate_limits,
        admission=admission,
        ledger=ledger,
        prompts=prompts,
        workflow=workflow,
        use_case=use_case,
    )
