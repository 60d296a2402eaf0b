"""Error Handlers: render every failure of a tool route as one JSON error envelope.

Invariants:
    - Envelope shape: {"error": {code, message, category, severity, ...}}
    - OpalToolError -> its own http_status and to_response() body
    - RequestValidationError -> 400 VALIDATION_ERROR with one entry per field
    - Anything else -> 500 INTERNAL_ERROR with a fixed message
    - Client errors (4xx) log at WARNING, server-side failures at ERROR
    - Request bodies carry access tokens: validation failures are logged by
      field path only, never with the offending input
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from opal_tools.core.errors import (
    ErrorCategory, ErrorSeverity, OpalToolError, ToolExecutionError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OpalToolError, handle_tool_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


async def handle_tool_error(request: Request, exc: OpalToolError) -> JSONResponse:
    tool_name = exc.context.tool_name or request.path_params.get("tool_name")
    error_code = exc.code
    if isinstance(exc, ToolExecutionError) and isinstance(exc.cause, OpalToolError):
        error_code = f"{exc.code}/{exc.cause.code}"
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level, f"{request.method} {request.url.path} -> {exc.http_status}: {exc.message}",
        extra={
            "tool_name": tool_name, "error_code": error_code,
            "status_code": exc.http_status,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    logger.warning(
        f"Rejected request body on {request.url.path}: "
        f"{', '.join(_field_path(e['loc']) for e in errors)}",
        extra={
            "tool_name": request.path_params.get("tool_name"),
            "error_code": "VALIDATION_ERROR",
            "status_code": status.HTTP_400_BAD_REQUEST,
        },
    )
    details = [
        {"field": _field_path(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in errors
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"tool_name": request.path_params.get("tool_name")},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
