from __future__ import annotations

from abc import ABC, abstractmethod


class BillCalculator(ABC):
    """Calculator interface (Strategy Pattern for mess bills)."""

    @abstractmethod
    def amount(self, *, meals: int, approved_leaves: int) -> int:
        raise NotImplementedError
