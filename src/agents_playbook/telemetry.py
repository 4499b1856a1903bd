"""Sampled debug-level metrics for plan builds and step lookups.

Records are plain dicts logged at DEBUG on this module's logger, tagged with
the current request's correlation ID. Nothing is exported elsewhere.
"""

import logging
import random
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from agents_playbook.config import TELEMETRY_ENABLED, TELEMETRY_SAMPLE_RATE
from agents_playbook.logging_context import get_correlation_id

logger = logging.getLogger(__name__)


def _should_sample() -> bool:
    """Return True if telemetry should be recorded for this operation."""
    if not TELEMETRY_ENABLED:
        return False
    try:
        return random.random() < max(  # nosec B311  # Non-cryptographic sampling
            0.0, min(1.0, TELEMETRY_SAMPLE_RATE)
        )
    except (TypeError, ValueError):
        return False


def _emit(kind: str, metric: str, fields: dict[str, Any]) -> None:
    record: dict[str, Any] = {
        "metric": metric,
        "type": kind,
        **fields,
        "corr_id": get_correlation_id(),
    }
    logger.debug("Telemetry %s: %s", kind, record)


def incr(metric: str, value: int = 1, **labels: Any) -> None:
    """Increment a counter metric.

    Args:
        metric: The metric name, e.g. ``execution_plan.not_found``
        value: The value to increment by (default: 1)
        **labels: Additional key-value labels, e.g. ``workflow_id``
    """
    if not _should_sample():
        return
    _emit("counter", metric, {"value": value, **labels})


@contextmanager
def timer(metric: str, **labels: Any) -> Generator[None, None, None]:
    """Time the enclosed block; the record notes whether it raised."""
    if not _should_sample():
        yield
        return

    start = time.perf_counter()
    ok = False
    try:
        yield
        ok = True
    finally:
        dur_ms = (time.perf_counter() - start) * 1000.0
        _emit("timer", metric, {"ms": round(dur_ms, 2), "ok": ok, **labels})
