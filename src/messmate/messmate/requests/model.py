from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    user_email: str
    start_date: date
    end_date: date
    meal_type: str
    reason: str
    status: RequestStatus
    created_at: datetime
    responded_by: Optional[str] = None
    responded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "user_email": self.user_email,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "meal_type": self.meal_type,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "responded_by": self.responded_by,
            "responded_at": self.responded_at.isoformat() if self.responded_at else None,
        }
