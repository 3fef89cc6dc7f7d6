from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import DailyQRCode


class QRCodeRepository(Protocol):
    def create(self, *, qr_date: date, qr_value: str, meal_type: Optional[str], created_by: Optional[str]) -> int:
        raise NotImplementedError

    def get_by_value(self, qr_value: str) -> Optional[DailyQRCode]:
        raise NotImplementedError

    def latest_for_date(self, qr_date: date) -> Optional[DailyQRCode]:
        """Most recently issued code for the given day."""

        raise NotImplementedError
