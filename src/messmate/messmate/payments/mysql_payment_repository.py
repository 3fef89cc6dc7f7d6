from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Payment
from .repository import PaymentRepository

_COLUMNS = """
    payment_id, user_id, user_email, amount, month, transaction_id, payment_method,
    status, created_at, verified_by, verified_at
"""


def _to_payment(r: dict) -> Payment:
    return Payment(
        payment_id=int(r["payment_id"]),
        user_id=int(r["user_id"]),
        user_email=r["user_email"],
        amount=Decimal(str(r["amount"])),
        month=r["month"],
        transaction_id=r["transaction_id"],
        payment_method=r["payment_method"],
        status=PaymentStatus(r["status"]),
        created_at=r["created_at"],
        verified_by=r.get("verified_by"),
        verified_at=r.get("verified_at"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        user_email: str,
        amount: Decimal,
        month: str,
        transaction_id: str,
        payment_method: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(user_id, user_email, amount, month, transaction_id, payment_method, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    user_email,
                    amount,
                    month,
                    transaction_id,
                    payment_method,
                    PaymentStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments WHERE payment_id=%s", (int(payment_id),))
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def list_all(
        self,
        *,
        status: Optional[PaymentStatus] = None,
        user_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Payment]:
        where = []
        params: list = []
        if status is not None:
            where.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))

        sql = f"SELECT {_COLUMNS} FROM payments"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, payment_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_payment(r) for r in fetchall(cur)]

    def latest_for_month(self, *, user_id: int, month: str) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payments
                WHERE user_id=%s AND month=%s
                ORDER BY created_at DESC, payment_id DESC
                LIMIT 1
                """,
                (int(user_id), month),
            )
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def decide(self, *, payment_id: int, status: PaymentStatus, verified_by: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payments
                SET status=%s, verified_by=%s, verified_at=NOW()
                WHERE payment_id=%s AND status=%s
                """,
                (status.value, verified_by, int(payment_id), PaymentStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def count_by_status(self, status: PaymentStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM payments WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def sum_paid(self, *, month: Optional[str] = None) -> Decimal:
        sql = "SELECT COALESCE(SUM(amount), 0) AS total FROM payments WHERE status=%s"
        params: list = [PaymentStatus.PAID.value]
        if month is not None:
            sql += " AND month=%s"
            params.append(month)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return Decimal(str(r["total"])) if r else Decimal("0")
