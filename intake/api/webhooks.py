from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Request, Response
from pydantic import ValidationError

from intake.application.dto.telegram_update import TelegramUpdateDTO
from intake.core.config import settings
from intake.infrastructure.telegram.telegram_client import TelegramClientError
from intake.infrastructure.telegram.webhook_verify import verify_secret_token
from intake.wiring.dependencies import get_handle_incoming_event_use_case, get_telegram_client


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/webhooks/telegram")
async def telegram_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
) -> Response:
    secret = request.headers.get("X-Telegram-Bot-Api-Secret-Token")
    if not verify_secret_token(secret, settings.TELEGRAM_WEBHOOK_SECRET, settings.ENV):
        return Response(status_code=403)

    try:
        use_case = get_handle_incoming_event_use_case()
    except Exception as e:
        logger.exception("Failed to initialize use case", extra={"reason": str(e)})
        return Response(status_code=500)

    body = await request.body()
    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        update = TelegramUpdateDTO.model_validate(payload)
    except (ValueError, ValidationError):
        logger.exception("Failed to parse webhook body")
        return Response(status_code=400)

    if update.callback_query_id:
        background_tasks.add_task(_acknowledge, update.callback_query_id)

    inbound = update.extract_event()
    if inbound is None:
        return Response(status_code=200)

    logger.info("Update received", extra={"user_id": inbound.user_id, "event": type(inbound.event).__name__})
    background_tasks.add_task(use_case.handle, inbound)
    return Response(status_code=200)


async def _acknowledge(callback_query_id: str) -> None:
    client = get_telegram_client()
    if client is None:
        return
    try:
        await client.answer_callback_query(callback_query_id)
    except TelegramClientError as e:
        logger.info("Callback query not answered", extra={"reason": str(e)})
