"""
Sentinel - Interactions Router
==============================

The Discord interactions webhook.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from sentinel.api.dependencies import get_dispatcher, get_notifier
from sentinel.core.constants import SIGNATURE_HEADER, TIMESTAMP_HEADER
from sentinel.interactions.dispatcher import InteractionDispatcher
from sentinel.moderation.audit import AuditNotifier


router = APIRouter(prefix="/interactions", tags=["Interactions"])


@router.post("")
async def receive_interaction(
    request: Request,
    background_tasks: BackgroundTasks,
    dispatcher: InteractionDispatcher = Depends(get_dispatcher),
    notifier: AuditNotifier = Depends(get_notifier),
) -> Response:
    """
    Verify and answer one Discord interaction.

    The raw body is read as bytes and verified before anything parses it.
    The audit broadcast runs as a background task, after the response
    has been sent.
    """
    raw_body = await request.body()
    outcome = await dispatcher.dispatch(
        raw_body,
        request.headers.get(SIGNATURE_HEADER),
        request.headers.get(TIMESTAMP_HEADER),
    )

    if not outcome.is_json:
        return PlainTextResponse(outcome.body, status_code=outcome.status_code)

    if outcome.broadcast is not None:
        background_tasks.add_task(
            notifier.broadcast,
            outcome.broadcast.interaction,
            outcome.broadcast.message,
        )

    return JSONResponse(outcome.body, status_code=outcome.status_code)


__all__ = ["router"]
