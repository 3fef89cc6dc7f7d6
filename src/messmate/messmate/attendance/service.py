from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_CYCLE_DAYS, DEFAULT_MEAL_TYPE
from ..core.enums import Role
from ..core.exceptions import AlreadyExistsError, AuthorizationError
from ..menu.model import MenuItem
from ..menu.service import MenuService
from ..qrcodes.model import DailyQRCode
from ..qrcodes.service import QRCodeService
from .cycle import CycleWindow, current_cycle
from .export import build_attendance_csv, export_filename
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    qr_code: DailyQRCode
    menu: Sequence[MenuItem]


@dataclass(frozen=True)
class CycleSummary:
    window: Optional[CycleWindow]
    records: Sequence[AttendanceRecord]

    @property
    def count(self) -> int:
        return len(self.records)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        qr_codes: QRCodeService,
        menu: MenuService,
        *,
        cycle_days: int = DEFAULT_CYCLE_DAYS,
    ):
        self._attendance = attendance
        self._qr_codes = qr_codes
        self._menu = menu
        self._cycle_days = int(cycle_days)

    def verify_scan(self, qr_data: str, *, now: datetime | None = None) -> ScanResult:
        now = now or now_local()
        today = now.date()
        code = self._qr_codes.resolve_for_day(qr_data, today)
        return ScanResult(qr_code=code, menu=self._menu.menu_for(today))

    def mark_attendance(
        self,
        *,
        user_id: int,
        user_email: str,
        user_name: Optional[str],
        qr_data: str,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        scan = self.verify_scan(qr_data, now=now)

        if self._attendance.get_for_user_and_date(int(user_id), today):
            raise AlreadyExistsError("You have already marked attendance for today")

        meal_type = scan.qr_code.meal_type or DEFAULT_MEAL_TYPE
        attend_time = now.time().replace(microsecond=0)
        attendance_id = self._attendance.create(
            user_id=int(user_id),
            user_email=user_email,
            user_name=user_name,
            attend_date=today,
            attend_time=attend_time,
            meal_type=meal_type,
            qr_code_id=scan.qr_code.qr_id,
        )
        logger.info("Attendance %s marked for %s on %s", attendance_id, user_email, today)
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=int(user_id),
            user_email=user_email,
            user_name=user_name,
            attend_date=today,
            attend_time=attend_time,
            meal_type=meal_type,
            qr_code_id=scan.qr_code.qr_id,
            created_at=now,
        )

    def has_attended(self, user_id: int, day: date) -> bool:
        return self._attendance.get_for_user_and_date(int(user_id), day) is not None

    def history_for(self, user_id: int) -> Sequence[AttendanceRecord]:
        return list(self._attendance.list_for_user(int(user_id)))

    def cycle_for(self, user_id: int, today: date) -> CycleSummary:
        window, records = current_cycle(self.history_for(user_id), today, self._cycle_days)
        return CycleSummary(window=window, records=records)

    def list_all(self, *, current_role: Role) -> Sequence[AttendanceRecord]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to view all attendance")
        return list(self._attendance.list_all())

    def export_csv(self, *, current_role: Role, today: date | None = None) -> tuple[str, str]:
        """Return ``(filename, csv_text)`` for every attendance record."""

        records = self.list_all(current_role=current_role)
        content = build_attendance_csv(records)
        return export_filename(today or now_local().date()), content

    def unique_attendees(self) -> int:
        return self._attendance.count_distinct_users()
