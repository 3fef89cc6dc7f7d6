from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Sequence

from ..attendance.service import AttendanceService
from ..billing.service import BillEstimate, BillingService
from ..common.datetime_utils import month_label, now_local
from ..feedback.service import FeedbackService
from ..menu.model import MenuItem
from ..menu.service import MenuService
from ..payments.service import PaymentService
from ..requests.service import LeaveRequestService


@dataclass(frozen=True)
class StudentSummary:
    attendance_count: int
    bill: BillEstimate
    attended_today: bool
    todays_menu: Sequence[MenuItem]
    payment_month: str
    payment_status: str

    def to_dict(self) -> dict:
        return {
            "attendance_count": self.attendance_count,
            "estimated_bill": self.bill.amount,
            "bill": self.bill.to_dict(),
            "attended_today": self.attended_today,
            "todays_menu": [i.to_dict() for i in self.todays_menu],
            "payment_month": self.payment_month,
            "payment_status": self.payment_status,
        }


@dataclass(frozen=True)
class AdminStats:
    unique_users: int
    monthly_revenue: Decimal
    total_revenue: Decimal
    pending_feedback: int
    pending_leaves: int
    pending_payments: int

    def to_dict(self) -> dict:
        return {
            "unique_users": self.unique_users,
            "monthly_revenue": str(self.monthly_revenue),
            "total_revenue": str(self.total_revenue),
            "pending_feedback": self.pending_feedback,
            "pending_leaves": self.pending_leaves,
            "pending_payments": self.pending_payments,
        }


class DashboardService:
    def __init__(
        self,
        *,
        attendance: AttendanceService,
        billing: BillingService,
        menu: MenuService,
        payments: PaymentService,
        leaves: LeaveRequestService,
        feedback: FeedbackService,
    ):
        self._attendance = attendance
        self._billing = billing
        self._menu = menu
        self._payments = payments
        self._leaves = leaves
        self._feedback = feedback

    def student_summary(self, *, user_id: int, now: datetime | None = None) -> StudentSummary:
        today = (now or now_local()).date()
        bill = self._billing.estimate(user_id=user_id, today=today)
        return StudentSummary(
            attendance_count=bill.meals,
            bill=bill,
            attended_today=self._attendance.has_attended(user_id, today),
            todays_menu=self._menu.menu_for(today),
            payment_month=month_label(today),
            payment_status=self._payments.status_for(user_id=user_id, today=today),
        )

    def admin_stats(self, *, today: date | None = None) -> AdminStats:
        today = today or now_local().date()
        return AdminStats(
            unique_users=self._attendance.unique_attendees(),
            monthly_revenue=self._payments.monthly_revenue(today),
            total_revenue=self._payments.total_revenue(),
            pending_feedback=self._feedback.count_pending(),
            pending_leaves=self._leaves.count_pending(),
            pending_payments=self._payments.count_pending(),
        )
