"""
Request-scoped correlation IDs.

The ID lives in a ContextVar so it follows a request across awaits and is
stamped onto every log record by CorrelationIdFilter. Caller-supplied IDs
are accepted only when they are short and header-safe; anything else is
replaced so a widget on a customer site cannot inject text into log lines.

Dependencies: contextvars, re, uuid
System role: Request tracing across service boundaries
"""

import re
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: Inbound ID; generated when missing or not header-safe

    Returns:
        str: The ID now bound
    """
    if not correlation_id or not _ACCEPTED_ID.match(correlation_id):
        correlation_id = new_correlation_id()
    _correlation_id.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Current correlation ID, or "" outside a request."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("")


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block, then restore the previous one."""
    token = _correlation_id.set("")
    try:
        yield set_correlation_id(correlation_id)
    finally:
        _correlation_id.reset(token)
