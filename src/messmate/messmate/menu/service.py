from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import weekday_name
from ..common.validators import clean_text
from ..core.constants import WEEKDAYS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import MenuItem
from .repository import MenuRepository

logger = logging.getLogger(__name__)


class MenuService:
    def __init__(self, menu: MenuRepository):
        self._menu = menu

    @staticmethod
    def _clean(day: Optional[str], meal_type: Optional[str], items: Optional[str]) -> tuple[str, str, str]:
        day = clean_text(day)
        meal_type = clean_text(meal_type)
        items = clean_text(items)
        if not day or not meal_type or not items:
            raise ValidationError("Please fill in all fields")

        day = day.capitalize()
        if day not in WEEKDAYS:
            raise ValidationError(f"Unknown day: {day}")
        return day, meal_type.lower(), items

    def weekly_menu(self) -> Sequence[MenuItem]:
        return list(self._menu.list_all())

    def menu_for(self, day: date) -> Sequence[MenuItem]:
        name = weekday_name(day).lower()
        return [item for item in self._menu.list_all() if item.day.lower() == name]

    def add_item(
        self,
        *,
        current_role: Role,
        created_by: str,
        day: str,
        meal_type: str,
        items: str,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to edit the menu")

        day, meal_type, items = self._clean(day, meal_type, items)
        item_id = self._menu.create(day=day, meal_type=meal_type, items=items, created_by=created_by)
        logger.info("Menu item %s added (%s %s)", item_id, day, meal_type)
        return item_id

    def update_item(self, *, current_role: Role, item_id: int, day: str, meal_type: str, items: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to edit the menu")

        day, meal_type, items = self._clean(day, meal_type, items)
        if not self._menu.get_by_id(int(item_id)):
            raise NotFoundError("Menu item not found")
        # MySQL reports 0 affected rows when the values are unchanged
        self._menu.update(item_id=int(item_id), day=day, meal_type=meal_type, items=items)
        logger.info("Menu item %s updated", item_id)

    def delete_item(self, *, current_role: Role, item_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to edit the menu")

        if not self._menu.delete(item_id=int(item_id)):
            raise NotFoundError("Menu item not found")
        logger.info("Menu item %s deleted", item_id)
