from __future__ import annotations

from ...core.constants import DEFAULT_MEAL_RATE
from .base import BillCalculator


class PerMealBillCalculator(BillCalculator):
    """Flat rule: (meals - approved leaves) * rate.

    The result is not clamped, so more leaves than meals gives a negative amount.
    """

    def __init__(self, rate: int = DEFAULT_MEAL_RATE):
        self.rate = int(rate)

    def amount(self, *, meals: int, approved_leaves: int) -> int:
        return (int(meals) - int(approved_leaves)) * self.rate
