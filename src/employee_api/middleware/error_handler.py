"""Global exception handlers.

Every error response leaving the API goes through here. Outside debug mode,
details are reduced to messages known not to leak internals: domain messages
that only echo the caller's own input, or a generic text per status code.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.config import get_settings
from employee_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

GENERIC_MESSAGES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Invalid request",
    status.HTTP_403_FORBIDDEN: "Access denied",
    status.HTTP_404_NOT_FOUND: "Resource not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
    status.HTTP_409_CONFLICT: "Conflict with existing resource",
    422: "Invalid input data",
    status.HTTP_429_TOO_MANY_REQUESTS: "Too many requests",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal server error",
    status.HTTP_503_SERVICE_UNAVAILABLE: "Service temporarily unavailable",
}

# Fragments of messages raised by the domain and service layers
SAFE_MESSAGE_FRAGMENTS: tuple[str, ...] = (
    "access denied",
    "resource not found",
    "employee not found",
    "employee with id",
    "already exists",
    "already in use by another employee",
    "is required",
    "must be at least 18 years old",
    "cannot be empty",
    "phone number not found",
    "employee is already",
    "higher permissions than your own",
)

MAX_VALIDATION_ERRORS = 3


def is_safe_error_message(message: str) -> bool:
    """Check if a message may be returned to the client as-is."""
    lowered = message.lower()
    return any(fragment in lowered for fragment in SAFE_MESSAGE_FRAGMENTS)


def _summarize_validation_errors(errors: list | tuple) -> str | None:
    """Render pydantic errors as "field: message" pairs, dropping input values."""
    parts = []
    for error in errors:
        if not isinstance(error, dict):
            continue
        loc = error.get("loc") or ()
        field = loc[-1] if loc else "field"
        if isinstance(field, str) and not field.startswith("_"):
            parts.append(f"{field}: {error.get('msg', 'Invalid value')}")
    if not parts:
        return None
    return "; ".join(parts[:MAX_VALIDATION_ERRORS])


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Reduce an error detail to something safe to show to clients.

    Args:
        detail: Original detail (message string or list of validation errors)
        status_code: HTTP status code of the response

    Returns:
        The detail itself if it is a known-safe message, a field summary for
        validation errors, or the generic message for the status code
    """
    if isinstance(detail, str) and is_safe_error_message(detail):
        return detail
    if isinstance(detail, (list, tuple)):
        summary = _summarize_validation_errors(detail)
        if summary:
            return summary
    return GENERIC_MESSAGES.get(status_code, "Request failed")


def _cors_headers(request: Request) -> dict[str, str]:
    """Echo allowed origins on error responses.

    Responses built by exception handlers skip the CORS middleware.
    """
    origin = request.headers.get("origin")
    if origin and origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


def _error_response(
    request: Request,
    status_code: int,
    content: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers={**(headers or {}), **_cors_headers(request)},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return HTTPException details, sanitized outside debug mode."""
    detail = exc.detail if get_settings().debug else sanitize_error_detail(exc.detail, exc.status_code)
    return _error_response(request, exc.status_code, {"detail": detail}, exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 for request bodies and parameters that fail validation.

    Input values are never logged or echoed back; they may hold passwords.
    """
    errors = exc.errors()
    logger.warning(
        f"Validation error for {request.url.path}: {[error.get('loc') for error in errors]}"
    )

    if get_settings().debug:
        detail: Any = [
            {key: error[key] for key in ("loc", "msg", "type") if key in error}
            for error in errors
        ]
    else:
        detail = sanitize_error_detail(errors, 422)
    return _error_response(request, 422, {"detail": detail})


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Map database errors that escaped the repositories to generic responses."""
    log_error(logger, f"Database error for {request.url.path}", exc)

    if isinstance(exc, IntegrityError):
        message = str(exc).lower()
        if "unique" in message or "duplicate" in message:
            return _error_response(
                request, status.HTTP_409_CONFLICT, {"detail": "Resource already exists"}
            )

    content: dict[str, Any] = {"detail": "Database error occurred"}
    if get_settings().debug:
        content["type"] = type(exc).__name__
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected exceptions."""
    log_error(logger, f"Unhandled exception for {request.url.path}", exc)

    if get_settings().debug:
        content = {"detail": str(exc), "type": type(exc).__name__}
    else:
        content = {"detail": GENERIC_MESSAGES[status.HTTP_500_INTERNAL_SERVER_ERROR]}
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)
