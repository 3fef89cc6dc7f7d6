from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one meal attendance, at most one per user per day."""

    attendance_id: int
    user_id: int
    user_email: str
    user_name: Optional[str]
    attend_date: date
    attend_time: time
    meal_type: str
    qr_code_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "user_email": self.user_email,
            "user_name": self.user_name,
            "date": self.attend_date.isoformat(),
            "time": self.attend_time.strftime("%H:%M:%S"),
            "meal_type": self.meal_type,
            "qr_code_id": self.qr_code_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
