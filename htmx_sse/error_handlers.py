import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

logger = logging.getLogger("htmx_sse.errors")


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _missing_fields(exc: RequestValidationError) -> list[str]:
    return [
        str(err["loc"][-1])
        for err in exc.errors()
        if err.get("type") == "missing" and err.get("loc")
    ]


def register_error_handlers(app: FastAPI) -> None:
    # starlette base class so routing 404/405s land here as well
    @app.exception_handler(HTTPException)
    async def http_exc_handler(request: Request, exc: HTTPException):
        logger.warning(
            "HTTPException path=%s status=%s detail=%r",
            request.url.path, exc.status_code, exc.detail
        )
        return _error(exc.status_code, str(exc.detail) if exc.detail else "HTTP error")

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        missing = _missing_fields(exc)
        logger.warning(
            "ValidationError path=%s missing=%s errors=%s",
            request.url.path, missing, exc.errors()
        )
        if missing:
            return _error(422, f"Missing required parameter(s): {', '.join(missing)}", missing=missing)
        return _error(422, "Validation error", details=jsonable_encoder(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error at path=%s", request.url.path)
        return _error(500, "Internal server error")
