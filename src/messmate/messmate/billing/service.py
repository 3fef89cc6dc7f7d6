from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.cycle import CycleWindow
from ..attendance.service import AttendanceService
from ..requests.service import LeaveRequestService
from .calculator.base import BillCalculator
from .calculator.per_meal_calculator import PerMealBillCalculator


@dataclass(frozen=True)
class BillEstimate:
    meals: int
    approved_leaves: int
    amount: int
    window: Optional[CycleWindow] = None

    def to_dict(self) -> dict:
        return {
            "meals": self.meals,
            "approved_leaves": self.approved_leaves,
            "amount": self.amount,
            "cycle_start": self.window.start.isoformat() if self.window else None,
            "cycle_end": self.window.end.isoformat() if self.window else None,
        }


class BillingService:
    """Estimated bill for the running cycle.

    Meals come from the rolling attendance cycle while leaves are counted by
    calendar month of submission. The two periods need not line up.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        leaves: LeaveRequestService,
        *,
        calculator: Optional[BillCalculator] = None,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._calculator = calculator or PerMealBillCalculator()

    def estimate(self, *, user_id: int, today: date) -> BillEstimate:
        cycle = self._attendance.cycle_for(user_id, today)
        approved = self._leaves.approved_in_month(user_id=user_id, today=today)
        return BillEstimate(
            meals=cycle.count,
            approved_leaves=approved,
            amount=self._calculator.amount(meals=cycle.count, approved_leaves=approved),
            window=cycle.window,
        )
