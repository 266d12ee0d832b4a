# htmx_sse/deps.py
from fastapi import Request

from htmx_sse.config import Settings
from htmx_sse.core.registry import ChannelRegistry
from htmx_sse.services.job_runner import JobRunner
from htmx_sse.services.notifier import SseRepository


# everything below is built once in create_app() and parked on app.state
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> ChannelRegistry:
    return request.app.state.registry


def get_repository(request: Request) -> SseRepository:
    return request.app.state.repository


def get_job_runner(request: Request) -> JobRunner:
    return request.app.state.job_runner
