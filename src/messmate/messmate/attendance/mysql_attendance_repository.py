from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.constants import DEFAULT_MEAL_TYPE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, unique_violation
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, user_email, user_name,
    attend_date, attend_time, meal_type, qr_code_id, created_at
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        user_email=r["user_email"],
        user_name=r.get("user_name"),
        attend_date=r["attend_date"],
        attend_time=normalize_mysql_time(r["attend_time"]),
        meal_type=r.get("meal_type") or DEFAULT_MEAL_TYPE,
        qr_code_id=r.get("qr_code_id"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, attend_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE user_id=%s AND attend_date=%s",
                (int(user_id), attend_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        with unique_violation("You have already marked attendance for today"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(
                        user_id, user_email, user_name, attend_date, attend_time, meal_type, qr_code_id
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), user_email, user_name, attend_date, attend_time, meal_type, qr_code_id),
                )
                return int(cur.lastrowid)

    def list_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s
                ORDER BY attend_date ASC, attendance_id ASC
                """,
                (int(user_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance
            ORDER BY attend_date DESC, attend_time DESC, attendance_id DESC
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_record(r) for r in fetchall(cur)]

    def count_distinct_users(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(DISTINCT user_id) AS n FROM attendance")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
