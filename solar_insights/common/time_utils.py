"""UTC and monotonic time helpers."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")


def elapsed_ms(started_at: float) -> int:
    """Milliseconds since ``started_at``, a ``time.monotonic()`` reading."""
    return int((time.monotonic() - started_at) * 1000)
