from __future__ import annotations

import io
import logging
from datetime import date, datetime
from typing import Optional

import qrcode

from ..common.datetime_utils import now_local
from ..common.validators import clean_text
from ..core.constants import DEFAULT_MEAL_TYPE, QR_VALUE_PREFIX
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DailyQRCode
from .repository import QRCodeRepository

logger = logging.getLogger(__name__)


def build_qr_value(now: datetime) -> str:
    """``meal-attendance-<YYYY-MM-DD>-<epoch ms>``"""
    return f"{QR_VALUE_PREFIX}-{now.strftime('%Y-%m-%d')}-{int(now.timestamp() * 1000)}"


class QRCodeService:
    def __init__(self, codes: QRCodeRepository):
        self._codes = codes

    def issue_for_today(self, *, current_role: Role, created_by: str, now: Optional[datetime] = None) -> DailyQRCode:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to generate QR codes")

        now = now or now_local()
        value = build_qr_value(now)
        qr_id = self._codes.create(
            qr_date=now.date(),
            qr_value=value,
            meal_type=DEFAULT_MEAL_TYPE,
            created_by=created_by,
        )
        logger.info("QR code %s issued for %s by %s", qr_id, now.date(), created_by)
        return DailyQRCode(
            qr_id=qr_id,
            qr_date=now.date(),
            qr_value=value,
            meal_type=DEFAULT_MEAL_TYPE,
            created_by=created_by,
            created_at=now,
        )

    def active_for(self, day: date) -> Optional[DailyQRCode]:
        return self._codes.latest_for_date(day)

    def require_active(self, day: date) -> DailyQRCode:
        code = self.active_for(day)
        if not code:
            raise NotFoundError("No QR code has been generated for today")
        return code

    def resolve_for_day(self, scanned: str, day: date) -> DailyQRCode:
        """Look up a scanned value and check it belongs to ``day``."""

        scanned = clean_text(scanned)
        if not scanned:
            raise ValidationError("QR code must not be empty")

        code = self._codes.get_by_value(scanned)
        if not code:
            raise ValidationError("Invalid QR code")
        if code.qr_date != day:
            raise ValidationError("This QR code is not valid for today")
        return code

    @staticmethod
    def render_png(value: str) -> io.BytesIO:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(value)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return buf
