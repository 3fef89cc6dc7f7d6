from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import MenuItem


class MenuRepository(Protocol):
    def list_all(self) -> Sequence[MenuItem]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[MenuItem]:
        raise NotImplementedError

    def create(self, *, day: str, meal_type: str, items: str, created_by: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, *, item_id: int, day: str, meal_type: str, items: str) -> bool:
        raise NotImplementedError

    def delete(self, *, item_id: int) -> bool:
        raise NotImplementedError
