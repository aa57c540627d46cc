"""Logging setup and helpers that keep personal data out of production logs."""

import logging
import re
from typing import Any

from employee_api.config import get_settings

MAX_LOG_MESSAGE_LENGTH = 200

# Applied in order; hashes go first so their "/" and "." are not taken for paths
_REDACTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}"), "[HASH]"),
    (re.compile(r"(postgresql|postgres|asyncpg|https?)(\+\w+)?://\S+"), "[URL]"),
    (re.compile(r"['\"]?(/[\w./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?"), "[PATH]"),
    (re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+"), "[EMAIL]"),
    (re.compile(r"[\w\-]{32,}"), "[TOKEN]"),
]


def configure_logging() -> None:
    """Configure the root logger from settings. Later calls are no-ops."""
    level = get_settings().log_level_value
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("employee_api").setLevel(level)


def is_debug_mode() -> bool:
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Redact credentials, personal data and internals from an error message.

    Password hashes, connection URLs, file paths, email addresses and long
    token-like strings are replaced by placeholders, and the result is
    truncated to MAX_LOG_MESSAGE_LENGTH characters.

    Args:
        error: The exception to describe

    Returns:
        Message safe for production logs
    """
    message = str(error)
    for pattern, replacement in _REDACTIONS:
        message = pattern.sub(replacement, message)

    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        message = message[: MAX_LOG_MESSAGE_LENGTH - 3] + "..."
    return message


def _log(
    logger: logging.Logger,
    level: int,
    message: str,
    error: Exception | None,
    extra: dict[str, Any],
) -> None:
    if is_debug_mode():
        if error is None:
            logger.log(level, message, extra=extra)
        else:
            logger.log(
                level,
                f"{message}: {error}",
                exc_info=error if level >= logging.ERROR else None,
                extra=extra,
            )
        return

    # Production: no extra context, error text sanitized
    if error is None:
        logger.log(level, message)
    else:
        logger.log(level, f"{message}: {type(error).__name__}: {sanitize_exception_message(error)}")


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error, with full details only in debug mode.

    Args:
        logger: Logger to write to
        message: Generic message without personal data
        error: Optional exception; its traceback is included in debug mode
        **kwargs: Extra context, dropped outside debug mode
    """
    _log(logger, logging.ERROR, message, error, kwargs)


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log a warning, with full details only in debug mode."""
    _log(logger, logging.WARNING, message, error, kwargs)
