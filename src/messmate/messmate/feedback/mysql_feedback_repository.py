from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import FeedbackStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Feedback
from .repository import FeedbackRepository

_COLUMNS = """
    feedback_id, user_id, user_email, subject, message, rating, status,
    admin_response, created_at, responded_by, responded_at
"""


def _to_feedback(r: dict) -> Feedback:
    return Feedback(
        feedback_id=int(r["feedback_id"]),
        user_id=int(r["user_id"]),
        user_email=r["user_email"],
        subject=r["subject"],
        message=r["message"],
        rating=int(r["rating"]),
        status=FeedbackStatus(r["status"]),
        created_at=r["created_at"],
        admin_response=r.get("admin_response"),
        responded_by=r.get("responded_by"),
        responded_at=r.get("responded_at"),
    )


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, user_email: str, subject: str, message: str, rating: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO feedback(user_id, user_email, subject, message, rating, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), user_email, subject, message, int(rating), FeedbackStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, feedback_id: int) -> Optional[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM feedback WHERE feedback_id=%s", (int(feedback_id),))
            r = fetchone(cur)
            return _to_feedback(r) if r else None

    def list_all(
        self,
        *,
        status: Optional[FeedbackStatus] = None,
        user_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Feedback]:
        where = []
        params: list = []
        if status is not None:
            where.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))

        sql = f"SELECT {_COLUMNS} FROM feedback"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, feedback_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_feedback(r) for r in fetchall(cur)]

    def respond(
        self,
        *,
        feedback_id: int,
        status: FeedbackStatus,
        responded_by: str,
        admin_response: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE feedback
                SET status=%s, admin_response=%s, responded_by=%s, responded_at=NOW()
                WHERE feedback_id=%s AND status=%s
                """,
                (status.value, admin_response, responded_by, int(feedback_id), FeedbackStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def count_by_status(self, status: FeedbackStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM feedback WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
