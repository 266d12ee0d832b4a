# htmx_sse/routers/events.py
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Query
from sse_starlette.sse import EventSourceResponse

from htmx_sse.config import Settings
from htmx_sse.core.models import SseChannel
from htmx_sse.deps import get_app_settings, get_repository
from htmx_sse.services.notifier import SseRepository

logger = logging.getLogger("htmx_sse.events")

router = APIRouter(tags=["events"])


async def _event_stream(client_id: str, channel: SseChannel) -> AsyncIterator[dict]:
    try:
        async for fragment in channel.stream():
            # unnamed event -> "message", which the page's sse-swap listens for
            yield {"data": fragment}
    finally:
        channel.close()
        logger.info("Channel for user %s closed", client_id)


@router.get("/progress-events")
async def progress_events(
    uuid: str = Query(..., min_length=1),
    repository: SseRepository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    channel = SseChannel()
    repository.subscribe(uuid, channel)
    return EventSourceResponse(_event_stream(uuid, channel), ping=settings.SSE_PING_SECONDS)
