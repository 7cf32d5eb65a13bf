import json
import logging
import time
import traceback
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from partsflow.core.config import settings

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
logger = logging.getLogger("partsflow.api")

# Codes for the statuses the API raises itself; anything else is "http_error".
_STATUS_CODE_MAP = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
}


def setup_observability(level: str | None = None) -> None:
    logger.setLevel(level or settings.log_level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def get_request_id() -> str:
    return request_id_ctx.get()


def log_event(event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    """Emit one JSON log line tagged with the current request id."""
    payload = {"event": event, "request_id": get_request_id(), **fields}
    logger.log(level, json.dumps(payload, default=str))


def _request_id(request: Request) -> str:
    return (
        getattr(request.state, "request_id", None)
        or request.headers.get("x-request-id")
        or get_request_id()
    )


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: list[dict] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": _request_id(request),
                "path": request.url.path,
                "details": details,
            }
        },
    )


async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid4())
    request.state.request_id = request_id
    token = request_id_ctx.set(request_id)
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        log_event(
            "request",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        request_id_ctx.reset(token)

    response.headers["X-Request-ID"] = request_id
    response.headers["X-API-Timeout-Hint-Ms"] = str(settings.api_timeout_hint_ms)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    log_event(
        "unhandled_exception",
        level=logging.ERROR,
        request_id=_request_id(request),
        path=request.url.path,
        error=repr(exc),
        traceback="".join(traceback.format_exception(exc, limit=10)),
    )
    return _error_response(request, 500, "internal_error", "Internal server error")


async def http_exception_handler(request: Request, exc: HTTPException):
    if isinstance(exc.detail, str):
        message, details = exc.detail, None
    else:
        message, details = "HTTP error", exc.detail
    return _error_response(
        request,
        exc.status_code,
        _STATUS_CODE_MAP.get(exc.status_code, "http_error"),
        message,
        details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Bad input is a 400 with one entry per field, keyed by its wire name.
    details = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", []) if part != "body"]
        details.append(
            {
                "field": ".".join(location) or "body",
                "message": err.get("msg", "Invalid value"),
                "type": err.get("type"),
            }
        )
    return _error_response(request, 400, "validation_error", "Invalid data", details)
