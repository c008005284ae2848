"""
Structured logging helpers.

Context values are summarized before they reach a record so chunk
contents and provider payloads never land whole in log lines. Context keys
that clash with LogRecord attributes are prefixed with "ctx_" instead of
raising inside logging.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a value for log context.

    Collections are reduced to their size; long strings are cut to
    max_length with a note of the original length.
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        text = value if isinstance(value, str) else str(value)

    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... (truncated, {len(text)} total)"


def _record_extra(context: dict[str, Any]) -> dict[str, str]:
    return {
        (f"ctx_{key}" if key in _RESERVED else key): safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log message at level with summarized context attached as record attributes."""
    logger.log(level, message, extra=_record_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with traceback and summarized context.

    Args:
        logger: Logger instance
        message: Log message
        exc: The exception being handled
        **context: Extra attributes; error_type and error_msg are added
    """
    extra = _record_extra(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
