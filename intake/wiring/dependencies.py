from functools import lru_cache
import logging

from intake.application.ports.message_platform import MessagePlatformPort
from intake.application.ports.operator_handoff import OperatorHandoffPort
from intake.application.use_cases.admission_control import AdmissionControl, SessionSweeper
from intake.application.use_cases.build_prompt import PromptBuilder
from intake.application.use_cases.handle_incoming_event import HandleIncomingEventUseCase
from intake.application.use_cases.message_ledger import MessageLedger, RetryPolicy
from intake.application.use_cases.workflow import WorkflowStateMachine
from intake.core.config import settings
from intake.infrastructure.handoff.logging_handoff import LoggingHandoff
from intake.infrastructure.handoff.telegram_group_handoff import TelegramGroupHandoff
from intake.infrastructure.knowledge.catalog_store import CatalogStore
from intake.infrastructure.store.memory_store import MemoryRateLimitStore, MemorySessionStore
from intake.infrastructure.telegram.mock_platform import MockTelegramPlatform
from intake.infrastructure.telegram.polling import UpdatePoller
from intake.infrastructure.telegram.telegram_client import TelegramClient
from intake.infrastructure.telegram.telegram_platform import TelegramPlatform


@lru_cache
def get_session_store() -> MemorySessionStore:
    return MemorySessionStore()


@lru_cache
def get_rate_limit_store() -> MemoryRateLimitStore:
    return MemoryRateLimitStore()


@lru_cache
def get_catalog() -> CatalogStore:
    return CatalogStore(fallback_language=settings.DEFAULT_LANGUAGE)


@lru_cache
def get_telegram_client() -> TelegramClient | None:
    if not settings.TELEGRAM_BOT_TOKEN:
        return None
    return TelegramClient(
        token=settings.TELEGRAM_BOT_TOKEN,
        base_url=settings.TELEGRAM_API_BASE,
        timeout=settings.TELEGRAM_TIMEOUT_SECONDS,
    )


@lru_cache
def get_message_platform() -> MessagePlatformPort:
    logger = logging.getLogger(__name__)
    logger.info("ENV=%s", settings.ENV)

    client = get_telegram_client()
    if client is None:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockTelegramPlatform (token missing, ENV=dev/local)")
            return MockTelegramPlatform()
        raise ValueError("TELEGRAM_BOT_TOKEN is required to talk to Telegram.")

    logger.info("Using real TelegramPlatform")
    return TelegramPlatform(client=client)


@lru_cache
def get_operator_handoff() -> OperatorHandoffPort:
    client = get_telegram_client()
    if client is None or not settings.OPERATOR_CHAT_ID:
        logging.getLogger(__name__).error("OPERATOR_CHAT_ID not set; orders will only be logged")
        return LoggingHandoff()
    return TelegramGroupHandoff(client=client, chat_id=settings.OPERATOR_CHAT_ID, catalog=get_catalog())


@lru_cache
def get_admission_control() -> AdmissionControl:
    return AdmissionControl(
        sessions=get_session_store(),
        rate_limits=get_rate_limit_store(),
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        max_messages=settings.RATE_LIMIT_MAX_MESSAGES,
        expiry_seconds=settings.SESSION_EXPIRY_SECONDS,
    )


@lru_cache
def get_session_sweeper() -> SessionSweeper:
    return SessionSweeper(get_admission_control(), interval_seconds=settings.SESSION_SWEEP_INTERVAL_SECONDS)


@lru_cache
def get_message_ledger() -> MessageLedger:
    policy = RetryPolicy(
        batch_size=settings.DELETE_BATCH_SIZE,
        batch_delay_seconds=settings.DELETE_BATCH_DELAY_SECONDS,
        max_attempts=settings.DELETE_MAX_ATTEMPTS,
        backoff_base_seconds=settings.DELETE_BACKOFF_BASE_SECONDS,
        backoff_max_seconds=settings.DELETE_BACKOFF_MAX_SECONDS,
        jitter=settings.DELETE_BACKOFF_JITTER,
    )
    return MessageLedger(platform=get_message_platform(), policy=policy)


@lru_cache
def get_prompt_builder() -> PromptBuilder:
    return PromptBuilder(get_catalog())


@lru_cache
def get_handle_incoming_event_use_case() -> HandleIncomingEventUseCase:
    workflow = WorkflowStateMachine(
        platform=get_message_platform(),
        ledger=get_message_ledger(),
        prompts=get_prompt_builder(),
        catalog=get_catalog(),
        handoff=get_operator_handoff(),
    )
    return HandleIncomingEventUseCase(
        sessions=get_session_store(),
        admission=get_admission_control(),
        ledger=get_message_ledger(),
        workflow=workflow,
        prompts=get_prompt_builder(),
        platform=get_message_platform(),
    )


def get_update_poller() -> UpdatePoller | None:
    client = get_telegram_client()
    if client is None:
        return None
    return UpdatePoller(
        client=client,
        use_case=get_handle_incoming_event_use_case(),
        poll_timeout=settings.TELEGRAM_POLL_TIMEOUT_SECONDS,
    )
