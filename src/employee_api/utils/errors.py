"""HTTP error helpers for routers.

Routers raise through these so that status codes and messages stay
consistent, and so domain errors are translated in a single place.
"""

import logging
from typing import NoReturn

from fastapi import HTTPException, status

from employee_api.exceptions import (
    AuthorizationError,
    ConflictError,
    EmployeeAPIError,
    NotFoundError,
    ValidationError,
)
from employee_api.utils.secure_logging import log_warning

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins
DOMAIN_ERROR_STATUS: tuple[tuple[type[EmployeeAPIError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def raise_not_found(entity: str = "Resource") -> NoReturn:
    """Raise 404 with "<entity> not found"."""
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")


def raise_bad_request(message: str = "Invalid request") -> NoReturn:
    """Raise 400 with the given message."""
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def raise_for_domain_error(error: EmployeeAPIError) -> NoReturn:
    """Translate a domain or service error into an HTTPException.

    Args:
        error: Error raised below the HTTP layer

    Raises:
        HTTPException: 404, 409, 403 or 400 depending on the error's base
            class, carrying the error's message; 400 with a generic message
            for anything else
    """
    log_warning(logger, f"{type(error).__name__} rejected request", error)
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(error, error_type):
            raise HTTPException(status_code=status_code, detail=error.message)
    raise_bad_request()
