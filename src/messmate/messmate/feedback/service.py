from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import clean_text, require_int_range
from ..core.enums import FeedbackStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Feedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, feedback: FeedbackRepository):
        self._feedback = feedback

    def submit(
        self,
        *,
        user_id: int,
        user_email: str,
        subject: Optional[str],
        message: Optional[str],
        rating,
    ) -> int:
        subject = clean_text(subject)
        message = clean_text(message)
        if not subject or not message or rating in (None, ""):
            raise ValidationError("Please fill in all fields")

        rating = require_int_range(rating, "Rating", 1, 5)
        feedback_id = self._feedback.create(
            user_id=int(user_id),
            user_email=user_email,
            subject=subject,
            message=message,
            rating=rating,
        )
        logger.info("Feedback %s submitted by %s (rating=%s)", feedback_id, user_email, rating)
        return feedback_id

    def list_mine(self, *, user_id: int) -> Sequence[Feedback]:
        return list(self._feedback.list_all(user_id=int(user_id)))

    def list_all(self, *, current_role: Role, status: Optional[FeedbackStatus] = None) -> Sequence[Feedback]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to view feedback")
        return list(self._feedback.list_all(status=status))

    def _respond(
        self,
        *,
        current_role: Role,
        responded_by: str,
        feedback_id: int,
        status: FeedbackStatus,
        response: Optional[str],
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to respond to feedback")

        item = self._feedback.get_by_id(int(feedback_id))
        if not item:
            raise NotFoundError("Feedback not found")
        if item.status != FeedbackStatus.PENDING:
            raise ValidationError("This feedback has already been processed")

        updated = self._feedback.respond(
            feedback_id=int(feedback_id),
            status=status,
            responded_by=responded_by,
            admin_response=clean_text(response) or None,
        )
        if not updated:
            raise ValidationError("This feedback has already been processed")
        logger.info("Feedback %s %s by %s", feedback_id, status.value, responded_by)

    def resolve(self, *, current_role: Role, responded_by: str, feedback_id: int, response: str = "") -> None:
        self._respond(
            current_role=current_role,
            responded_by=responded_by,
            feedback_id=feedback_id,
            status=FeedbackStatus.RESOLVED,
            response=response,
        )

    def reject(self, *, current_role: Role, responded_by: str, feedback_id: int, response: str = "") -> None:
        self._respond(
            current_role=current_role,
            responded_by=responded_by,
            feedback_id=feedback_id,
            status=FeedbackStatus.REJECTED,
            response=response,
        )

    def count_pending(self) -> int:
        return self._feedback.count_by_status(FeedbackStatus.PENDING)
