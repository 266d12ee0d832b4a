import logging
import time
from typing import Callable
from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger("htmx_sse.request")


def configure_logging(level: str = "INFO") -> None:
    # no-op if the root logger already has handlers (uvicorn, pytest)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("htmx_sse").setLevel(level)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        client = request.client.host if request.client else "-"
        method = request.method
        path = request.url.path
        client_id = request.query_params.get("uuid", "-")

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000.0
            logger.exception(
                "client=%s uuid=%s method=%s path=%s status=%s duration_ms=%.2f UNHANDLED",
                client, client_id, method, path, 500, duration_ms
            )
            raise

        # for /progress-events this is time-to-headers, the stream stays open
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            "client=%s uuid=%s method=%s path=%s status=%s duration_ms=%.2f",
            client, client_id, method, path, response.status_code, duration_ms
        )
        return response


def register_request_logging(app: FastAPI) -> None:
    app.add_middleware(RequestLogMiddleware)
