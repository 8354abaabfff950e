"""
community_hub.api.errors

Exception -> HTTP response translation.

Responsibilities:
- Map `AppError` subclasses, request validation failures, integrity
  violations and unexpected exceptions to one JSON error body:
  `{"message": ..., "status": code[, "errors": {field: message}]}`.
- Log every handled error (warning for 4xx, exception for 5xx).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from community_hub.api.schemas.common import flatten_errors
from community_hub.errors import AppError, Conflict
from community_hub.observability.logging import get_logger
from community_hub.settings import Settings

log = get_logger(__name__)


def error_body(status: int, message: str, errors: Mapping[str, str] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message, "status": status}
    if errors:
        body["errors"] = dict(errors)
    return body


def install_error_handlers(app: FastAPI, *, settings: Settings) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError) -> JSONResponse:
        errors = getattr(exc, "errors", None)
        _log(exc.status_code, exc.message, request=request, errors=errors)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, exc.message, errors),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = flatten_errors(exc.errors(), skip_loc=1)
        _log(400, "Validation error", request=request, errors=errors)
        return JSONResponse(status_code=400, content=error_body(400, "Validation error", errors))

    @app.exception_handler(IntegrityError)
    async def _integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
        conflict = Conflict()
        _log(conflict.status_code, conflict.message, request=request, detail=str(exc.orig))
        return JSONResponse(
            status_code=conflict.status_code,
            content=error_body(conflict.status_code, conflict.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        _log(exc.status_code, message, request=request)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
        message = str(exc) if settings.env == "dev" and str(exc) else "Internal server error"
        return JSONResponse(status_code=500, content=error_body(500, message))


def _log(status: int, message: str, *, request: Request, **fields: Any) -> None:
    if status >= 500:
        log.error("request_failed", status=status, message=message, path=request.url.path, **fields)
    else:
        log.warning("request_rejected", status=status, message=message, path=request.url.path, **fields)


# --- Module Notes -----------------------------------------------------------
# Starlette routes the `Exception` handler through ServerErrorMiddleware, which
# re-raises after responding; test clients that raise app exceptions will see it.
