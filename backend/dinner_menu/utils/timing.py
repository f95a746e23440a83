"""Timing helpers for the model call and request handling."""

import time
from contextlib import contextmanager
from typing import Iterator

from dinner_menu.logging import get_logger

logger = get_logger(__name__)

# Prefix for all timing logs so they are easy to grep
_TIMING_PREFIX = "[TIMING]"


def format_duration(ms: int) -> str:
    """Return human-readable duration: e.g. 12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


class Span:
    def __init__(self, name: str) -> None:
        self.name = name
        self.start = time.perf_counter()
        self.elapsed_ms: int | None = None

    def stop(self) -> int:
        if self.elapsed_ms is None:
            self.elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        return self.elapsed_ms


@contextmanager
def time_span(name: str, **extra: object) -> Iterator[Span]:
    """Time a block and log it with optional key=value fields, also on failure."""
    span = Span(name)
    outcome = "ok"
    try:
        yield span
    except Exception:
        outcome = "error"
        raise
    finally:
        elapsed = span.stop()
        parts = [f"elapsed_ms={elapsed}", f"({format_duration(elapsed)})", f"outcome={outcome}"] + [
            f"{k}={v}" for k, v in extra.items()
        ]
        logger.info("%s %s %s", _TIMING_PREFIX, name, " ".join(parts))
