from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, attend_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        user_email: str,
        user_name: Optional[str],
        attend_date: date,
        attend_time: time,
        meal_type: str,
        qr_code_id: Optional[int],
    ) -> int:
        """Insert a record.

        Raises AlreadyExistsError when the user already has a row for ``attend_date``.
        """

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        """Every record of the user, oldest first."""

        raise NotImplementedError

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Newest first; every row unless ``limit`` is given."""

        raise NotImplementedError

    def count_distinct_users(self) -> int:
        raise NotImplementedError
