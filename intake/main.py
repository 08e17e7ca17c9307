import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from intake.api.webhooks import router as webhooks_router
from intake.core.config import settings
from intake.infrastructure.telegram.telegram_client import TelegramClientError
from intake.wiring.dependencies import get_session_sweeper, get_telegram_client, get_update_poller


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("user_id", "message_id", "state", "event", "attempt", "language", "reply_text", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    sweeper = get_session_sweeper()
    await sweeper.start()

    client = get_telegram_client()
    if client is not None:
        try:
            await client.set_my_description(settings.BOT_DESCRIPTION)
        except TelegramClientError as e:
            logger.warning("Failed to set bot description", extra={"reason": str(e)})

    poller = get_update_poller() if settings.TELEGRAM_MODE.lower() == "polling" else None
    if poller is not None:
        await poller.start()
    try:
        yield
    finally:
        if poller is not None:
            await poller.stop()
        await sweeper.stop()
        if client is not None:
            await client.aclose()


app = FastAPI(title="Sales Intake Bot", version="1.0.0", lifespan=lifespan)

app.include_router(webhooks_router, tags=["webhooks"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
