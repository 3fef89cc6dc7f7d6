"""Rolling attendance cycles.

The first recorded attendance anchors back-to-back windows of ``cycle_days``
days. The window containing today is the "current month" shown to students.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..core.constants import DEFAULT_CYCLE_DAYS
from .model import AttendanceRecord


@dataclass(frozen=True)
class CycleWindow:
    index: int
    start: date
    end: date  # exclusive

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


def cycle_window(first: date, today: date, cycle_days: int = DEFAULT_CYCLE_DAYS) -> CycleWindow:
    if cycle_days <= 0:
        raise ValueError("cycle_days must be positive")
    index = (today - first).days // cycle_days
    start = first + timedelta(days=index * cycle_days)
    return CycleWindow(index=index, start=start, end=start + timedelta(days=cycle_days))


def current_cycle(
    records: Sequence[AttendanceRecord],
    today: date,
    cycle_days: int = DEFAULT_CYCLE_DAYS,
) -> tuple[Optional[CycleWindow], list[AttendanceRecord]]:
    """Return today's window and the records inside it.

    No records means no window.
    """

    if not records:
        return None, []

    first = min(r.attend_date for r in records)
    window = cycle_window(first, today, cycle_days)
    return window, [r for r in records if window.contains(r.attend_date)]
