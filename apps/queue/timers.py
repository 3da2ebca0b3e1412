"""Elapsed-time projection shared by the state machine and the read serializers."""

from datetime import datetime, timedelta
from typing import Optional

_MS = timedelta(milliseconds=1)


def elapsed_seconds(now: datetime, start: Optional[datetime]) -> int:
    """Whole seconds from `start` to `now`: floor(ms / 1000), never negative, 0 without a start."""
    if start is None:
        return 0
    return max(0, ((now - start) // _MS) // 1000)


def phase_elapsed(entry, now: datetime) -> Optional[int]:
    """Running timer for the entry's current phase; None once it is finished."""
    if entry.status == entry.Status.WAITING:
        return elapsed_seconds(now, entry.arrived_at)
    if entry.status == entry.Status.UNLOADING:
        return elapsed_seconds(now, entry.unload_started_at)
    return None
