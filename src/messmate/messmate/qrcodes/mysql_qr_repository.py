from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import DailyQRCode
from .repository import QRCodeRepository

_COLUMNS = "qr_id, qr_date, qr_value, meal_type, created_by, created_at"


def _to_qr(r: dict) -> DailyQRCode:
    return DailyQRCode(
        qr_id=int(r["qr_id"]),
        qr_date=r["qr_date"],
        qr_value=r["qr_value"],
        meal_type=r.get("meal_type"),
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
    )


class MySQLQRCodeRepository(QRCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, qr_date: date, qr_value: str, meal_type: Optional[str], created_by: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_qr(qr_date, qr_value, meal_type, created_by)
                VALUES(%s,%s,%s,%s)
                """,
                (qr_date, qr_value, meal_type, created_by),
            )
            return int(cur.lastrowid)

    def get_by_value(self, qr_value: str) -> Optional[DailyQRCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_qr WHERE qr_value=%s", (qr_value,))
            r = fetchone(cur)
            return _to_qr(r) if r else None

    def latest_for_date(self, qr_date: date) -> Optional[DailyQRCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_qr
                WHERE qr_date=%s
                ORDER BY created_at DESC, qr_id DESC
                LIMIT 1
                """,
                (qr_date,),
            )
            r = fetchone(cur)
            return _to_qr(r) if r else None
