from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from ..core.constants import CSV_COLUMNS, DEFAULT_MEAL_TYPE
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def _stamp(record: AttendanceRecord) -> datetime:
    if record.created_at:
        return record.created_at
    return datetime.combine(record.attend_date, record.attend_time)


def to_csv_row(record: AttendanceRecord) -> list[str]:
    stamp = _stamp(record)
    return [
        stamp.strftime("%Y-%m-%d"),
        stamp.strftime("%H:%M:%S"),
        record.user_email,
        record.meal_type or DEFAULT_MEAL_TYPE,
    ]


def build_attendance_csv(records: Sequence[AttendanceRecord]) -> str:
    """Plain comma-joined text, header first. Values are not quoted."""

    if not records:
        raise ValidationError("No attendance data to export")

    lines = [",".join(CSV_COLUMNS)]
    lines.extend(",".join(to_csv_row(r)) for r in records)
    return "\n".join(lines)


def export_filename(day: date) -> str:
    return f"attendance-data-{day.isoformat()}.csv"
