from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from htmx_sse.config import VERSION, Settings, get_settings
from htmx_sse.core.registry import ChannelRegistry
from htmx_sse.services.job_runner import JobRunner
from htmx_sse.services.notifier import SseRepository

from .middleware_logging import configure_logging, register_request_logging
from .error_handlers import register_error_handlers

from htmx_sse.routers.events import router as events_router
from htmx_sse.routers.health import router as health_router
from htmx_sse.routers.pages import router as pages_router


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ChannelRegistry] = None,
    job_runner: Optional[JobRunner] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    # =========================
    # ---- App Init ----
    # =========================
    app = FastAPI(title="htmx SSE demo", version=VERSION)
    register_request_logging(app)
    register_error_handlers(app)

    if settings.ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # process-wide state, one per app
    if registry is None:
        registry = ChannelRegistry()
    if job_runner is None:
        job_runner = JobRunner(
            interval=settings.step_interval,
            max_increment=settings.MAX_INCREMENT,
        )
    app.state.settings = settings
    app.state.registry = registry
    app.state.repository = SseRepository(registry)
    app.state.job_runner = job_runner

    app.include_router(pages_router)
    app.include_router(events_router)
    app.include_router(health_router)
    return app


app = create_app()
