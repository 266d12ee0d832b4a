# htmx_sse/routers/health.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from htmx_sse.config import VERSION, Settings
from htmx_sse.core.registry import ChannelRegistry
from htmx_sse.deps import get_app_settings, get_job_runner, get_registry
from htmx_sse.services.job_runner import JobRunner

router = APIRouter(tags=["health"])


class JobInfo(BaseModel):
    interval_s: float
    max_increment: int


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    port: int
    clients: int      # distinct uuids with at least one open channel
    channels: int
    sse_ping_s: int
    job: JobInfo


@router.get("/health", response_model=HealthResponse)
def health_check(
    settings: Settings = Depends(get_app_settings),
    registry: ChannelRegistry = Depends(get_registry),
    runner: JobRunner = Depends(get_job_runner),
):
    return HealthResponse(
        version=VERSION,
        port=settings.PORT,
        clients=len(registry),
        channels=registry.channel_count(),
        sse_ping_s=settings.SSE_PING_SECONDS,
        job=JobInfo(interval_s=runner.interval, max_increment=runner.max_increment),
    )
