import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, cast
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from bookstore_api.core.logging import get_logger


class AppError(Exception):
    """Base for every error kind the API turns into a response."""

    status_code: ClassVar[int] = HTTP_500_INTERNAL_SERVER_ERROR
    error_type: ClassVar[str] = "server_error"
    log_level: ClassVar[int] = logging.ERROR

    def __init__(self, message: str, details: dict[str, object] | None = None):
        super().__init__(message)
        self.message: str = message
        self.details: dict[str, object] | None = details


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = HTTP_400_BAD_REQUEST
    error_type = "validation_error"
    log_level = logging.WARNING


class NotFoundError(AppError):
    """No record for the requested identifier."""

    status_code = HTTP_404_NOT_FOUND
    error_type = "not_found"
    log_level = logging.WARNING


class StorageError(AppError):
    """Persistence layer failure."""

    error_type = "storage_error"


class UnexpectedError(AppError):
    """Anything else that escaped a handler."""


class HttpError(AppError):
    """Routing-level errors (unknown path, wrong method)."""

    error_type = "http_error"
    log_level = logging.WARNING


class ErrorBody(BaseModel):
    """Structured error body."""
    type: str
    message: str
    details: dict[str, object] | None = None


class ErrorEnvelope(BaseModel):
    error: ErrorBody
    meta: dict[str, object]


def _build_meta(request: Request) -> dict[str, object]:
    """Collect metadata for error responses."""
    return {
        "request_id": getattr(request.state, "correlation_id", "-"),
        "path": request.url.path,
        "method": request.method,
    }

def _serialize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> list[dict[str, object]]:
    """Serialize validation errors, handling non-serializable objects in context."""

    serialized_errors: list[dict[str, object]] = []

    for error in errors:
        serialized_error: dict[str, object] = dict(error)

        if "ctx" in serialized_error and isinstance(serialized_error["ctx"], dict):
            ctx: dict[str, object] = cast(dict[str, object], serialized_error["ctx"]).copy()

            if "error" in ctx:
                ctx["error"] = str(ctx["error"])
            serialized_error["ctx"] = ctx
        serialized_errors.append(serialized_error)
    return serialized_errors


def error_response(
    request: Request, exc: AppError, status_code: int | None = None
) -> JSONResponse:
    """
    The one place an error kind becomes an HTTP response.
    Logs at the error's level, then renders the envelope.
    """
    status_code = status_code or exc.status_code
    adapter = get_logger(__name__, request)
    # LoggerAdapter.log would replace extra; go to the logger with both merged
    adapter.logger.log(
        exc.log_level,
        "%s %s failed: %s",
        request.method,
        request.url.path,
        exc.message,
        extra={**adapter.extra, "status_code": status_code, "error_type": exc.error_type},
        exc_info=exc.__cause__,
    )
    body = ErrorEnvelope(
        error=ErrorBody(type=exc.error_type, message=exc.message, details=exc.details),
        meta=_build_meta(request),
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body.model_dump()))


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationError(
            "Invalid request payload",
            details={"errors": _serialize_validation_errors(exc.errors())},
        )
        return error_response(request, error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        error = HttpError(str(exc.detail) if exc.detail else "HTTP error")
        return error_response(request, error, status_code=exc.status_code)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        error = StorageError(str(exc))
        error.__cause__ = exc
        return error_response(request, error)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        error = UnexpectedError(str(exc) or type(exc).__name__)
        error.__cause__ = exc
        return error_response(request, error)
