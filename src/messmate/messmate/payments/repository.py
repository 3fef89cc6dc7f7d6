from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PaymentStatus
from .model import Payment


class PaymentRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[PaymentStatus] = None,
        user_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Payment]:
        """Newest first."""

        raise NotImplementedError

    def latest_for_month(self, *, user_id: int, month: str) -> Optional[Payment]:
        raise NotImplementedError

    def decide(self, *, payment_id: int, status: PaymentStatus, verified_by: str) -> bool:
        """Only pending payments can be decided."""

        raise NotImplementedError

    def count_by_status(self, status: PaymentStatus) -> int:
        raise NotImplementedError

    def sum_paid(self, *, month: Optional[str] = None) -> Decimal:
        """Total of paid amounts, optionally for a single month label."""

        raise NotImplementedError
