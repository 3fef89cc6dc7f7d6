from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import FeedbackStatus


@dataclass(frozen=True)
class Feedback:
    feedback_id: int
    user_id: int
    user_email: str
    subject: str
    message: str
    rating: int
    status: FeedbackStatus
    created_at: datetime
    admin_response: Optional[str] = None
    responded_by: Optional[str] = None
    responded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "feedback_id": self.feedback_id,
            "user_id": self.user_id,
            "user_email": self.user_email,
            "subject": self.subject,
            "message": self.message,
            "rating": self.rating,
            "status": self.status.value,
            "admin_response": self.admin_response,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "responded_by": self.responded_by,
            "responded_at": self.responded_at.isoformat() if self.responded_at else None,
        }
