from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class DailyQRCode:
    """Code shown at the counter; students scan it to mark attendance for ``qr_date``."""

    qr_id: int
    qr_date: date
    qr_value: str
    meal_type: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "qr_id": self.qr_id,
            "date": self.qr_date.isoformat(),
            "qr_value": self.qr_value,
            "meal_type": self.meal_type,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
