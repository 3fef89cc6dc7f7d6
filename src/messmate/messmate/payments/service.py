from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import month_label
from ..common.validators import clean_text, require_positive_amount
from ..core.enums import PaymentStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Payment
from .repository import PaymentRepository

logger = logging.getLogger(__name__)

UNPAID = "unpaid"


class PaymentService:
    def __init__(self, payments: PaymentRepository):
        self._payments = payments

    def submit(
        self,
        *,
        user_id: int,
        user_email: str,
        amount,
        month: Optional[str],
        transaction_id: Optional[str],
        payment_method: Optional[str],
    ) -> int:
        month = clean_text(month)
        transaction_id = clean_text(transaction_id)
        payment_method = clean_text(payment_method)
        if amount in (None, "") or not month or not transaction_id or not payment_method:
            raise ValidationError("Please fill in all fields")

        value = require_positive_amount(amount)
        payment_id = self._payments.create(
            user_id=int(user_id),
            user_email=user_email,
            amount=value,
            month=month,
            transaction_id=transaction_id,
            payment_method=payment_method.lower(),
        )
        logger.info("Payment %s of %s for %s submitted by %s", payment_id, value, month, user_email)
        return payment_id

    def list_mine(self, *, user_id: int) -> Sequence[Payment]:
        return list(self._payments.list_all(user_id=int(user_id)))

    def list_all(self, *, current_role: Role, status: Optional[PaymentStatus] = None) -> Sequence[Payment]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to view payments")
        return list(self._payments.list_all(status=status))

    def status_for(self, *, user_id: int, today: date) -> str:
        """Status of the latest payment for today's month label, or ``unpaid``."""

        latest = self._payments.latest_for_month(user_id=int(user_id), month=month_label(today))
        return latest.status.value if latest else UNPAID

    def _decide(self, *, current_role: Role, verified_by: str, payment_id: int, status: PaymentStatus) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to verify payments")

        payment = self._payments.get_by_id(int(payment_id))
        if not payment:
            raise NotFoundError("Payment not found")
        if payment.status != PaymentStatus.PENDING:
            raise ValidationError("This payment has already been processed")

        if not self._payments.decide(payment_id=int(payment_id), status=status, verified_by=verified_by):
            raise ValidationError("This payment has already been processed")
        logger.info("Payment %s marked %s by %s", payment_id, status.value, verified_by)

    def verify(self, *, current_role: Role, verified_by: str, payment_id: int) -> None:
        self._decide(
            current_role=current_role,
            verified_by=verified_by,
            payment_id=payment_id,
            status=PaymentStatus.PAID,
        )

    def reject(self, *, current_role: Role, verified_by: str, payment_id: int) -> None:
        self._decide(
            current_role=current_role,
            verified_by=verified_by,
            payment_id=payment_id,
            status=PaymentStatus.REJECTED,
        )

    def count_pending(self) -> int:
        return self._payments.count_by_status(PaymentStatus.PENDING)

    def monthly_revenue(self, today: date) -> Decimal:
        return self._payments.sum_paid(month=month_label(today))

    def total_revenue(self) -> Decimal:
        return self._payments.sum_paid()
