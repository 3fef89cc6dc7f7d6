from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class Payment:
    """A student's mess fee payment, awaiting admin verification while pending."""

    payment_id: int
    user_id: int
    user_email: str
    amount: Decimal
    month: str
    transaction_id: str
    payment_method: str
    status: PaymentStatus
    created_at: datetime
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "payment_id": self.payment_id,
            "user_id": self.user_id,
            "user_email": self.user_email,
            "amount": str(self.amount),
            "month": self.month,
            "transaction_id": self.transaction_id,
            "payment_method": self.payment_method,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "verified_by": self.verified_by,
            "verified_at": self.verified_at.isoformat() if self.verified_at else None,
        }
