"""Per-request correlation ID shared by log records and telemetry.

The HTTP middleware binds an ID for the duration of one MCP request, so every
plan build and step lookup it triggers can be traced back to that request.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

NO_CORRELATION_ID = "-"


def get_correlation_id() -> Optional[str]:
    """Get the correlation ID from the current request context, if any."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(value: str) -> Iterator[str]:
    """Bind value as the correlation ID until the block exits, then restore the previous one."""
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)


class CorrelationIdFilter(logging.Filter):
    """Stamp every record with ``corr_id`` so formatters can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.corr_id = get_correlation_id() or NO_CORRELATION_ID
        return True
