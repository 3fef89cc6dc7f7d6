from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import MenuItem
from .repository import MenuRepository

_COLUMNS = "item_id, day, meal_type, items, created_by, created_at, updated_at"


def _to_item(r: dict) -> MenuItem:
    return MenuItem(
        item_id=int(r["item_id"]),
        day=r["day"],
        meal_type=r["meal_type"],
        items=r["items"],
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLMenuRepository(MenuRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[MenuItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM weekly_menu
                ORDER BY FIELD(day, 'Monday','Tuesday','Wednesday','Thursday','Friday','Saturday','Sunday'),
                         item_id ASC
                """
            )
            return [_to_item(r) for r in fetchall(cur)]

    def get_by_id(self, item_id: int) -> Optional[MenuItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM weekly_menu WHERE item_id=%s", (int(item_id),))
            r = fetchone(cur)
            return _to_item(r) if r else None

    def create(self, *, day: str, meal_type: str, items: str, created_by: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO weekly_menu(day, meal_type, items, created_by)
                VALUES(%s,%s,%s,%s)
                """,
                (day, meal_type, items, created_by),
            )
            return int(cur.lastrowid)

    def update(self, *, item_id: int, day: str, meal_type: str, items: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE weekly_menu
                SET day=%s, meal_type=%s, items=%s, updated_at=NOW()
                WHERE item_id=%s
                """,
                (day, meal_type, items, int(item_id)),
            )
            return cur.rowcount > 0

    def delete(self, *, item_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM weekly_menu WHERE item_id=%s", (int(item_id),))
            return cur.rowcount > 0
