"""
Exception handlers for FastAPI application.

This module follows SRP by centralizing all exception handling logic.
Every failure is rendered as `{"ok": false, "message": ..., "error": ...}`.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.responses import error_response
from app.core.exceptions import AppError

logger = logging.getLogger(__name__)


def _format_validation_errors(errors: list[dict]) -> list[dict]:
    formatted = []
    for error in errors:
        # custom validators: report the raw ValueError text
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if error["type"] == "value_error" and ctx_error else error["msg"]
        formatted.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
                "message": message,
                "type": error["type"],
            }
        )
    return formatted


async def app_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle AppError and its subclasses."""
    if not isinstance(exc, AppError):
        return await global_exception_handler(request, exc)

    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(log_level, f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.message, exc.details, exc.status_code)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with the standard envelope."""
    http_exc = exc if isinstance(exc, StarletteHTTPException) else HTTPException(status_code=500, detail=str(exc))
    response = error_response(str(http_exc.detail), None, http_exc.status_code)
    if http_exc.headers:
        response.headers.update(http_exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors: 400 with the joined field messages."""
    if not isinstance(exc, (RequestValidationError, ValidationError)):
        return error_response(str(exc), None, status.HTTP_400_BAD_REQUEST)

    errors = _format_validation_errors(list(exc.errors()))
    logger.warning(f"Validation error on {request.url.path}: {errors}")

    message = ", ".join(error["message"] for error in errors) or "Validation error"
    return error_response(message, errors, status.HTTP_400_BAD_REQUEST)


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unique-constraint and foreign-key violations become 409 Conflict."""
    table = None
    if isinstance(exc, IntegrityError):
        diag = getattr(getattr(exc, "orig", None), "diag", None)
        table = getattr(diag, "table_name", None)

    logger.warning(f"Integrity error on {request.url.path}: {exc}")
    entity = table.rstrip("s").capitalize() if table else "Record"
    return error_response(f"{entity} already exists", None, status.HTTP_409_CONFLICT)


async def no_result_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning(f"No result on {request.url.path}: {exc}")
    return error_response("Record not found", None, status.HTTP_404_NOT_FOUND)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )
    return error_response("Something went wrong.", None, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(NoResultFound, no_result_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
