# htmx_sse/routers/pages.py
import logging
import uuid as uuid_lib

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from htmx_sse.deps import get_job_runner, get_repository
from htmx_sse.services.job_runner import JobRunner
from htmx_sse.services.notifier import SseRepository
from htmx_sse.templating import templates

logger = logging.getLogger("htmx_sse.pages")

router = APIRouter(tags=["pages"])


def _render_index(request: Request, client_id: str) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"uuid": client_id})


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return _render_index(request, str(uuid_lib.uuid4()))


# Plain `def`: runs on a threadpool worker and holds it for the whole job.
@router.post("/", response_class=HTMLResponse)
def generate_pdf(
    request: Request,
    uuid: str = Query(..., min_length=1),
    repository: SseRepository = Depends(get_repository),
    runner: JobRunner = Depends(get_job_runner),
):
    listener = repository.create_progress_listener(uuid)
    runner.run_listener(uuid, listener)
    return _render_index(request, uuid)
