from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import FeedbackStatus
from .model import Feedback


class FeedbackRepository(Protocol):
    def create(self, *, user_id: int, user_email: str, subject: str, message: str, rating: int) -> int:
        raise NotImplementedError

    def get_by_id(self, feedback_id: int) -> Optional[Feedback]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[FeedbackStatus] = None,
        user_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Feedback]:
        raise NotImplementedError

    def respond(
        self,
        *,
        feedback_id: int,
        status: FeedbackStatus,
        responded_by: str,
        admin_response: Optional[str],
    ) -> bool:
        """Only pending feedback can be answered."""

        raise NotImplementedError

    def count_by_status(self, status: FeedbackStatus) -> int:
        raise NotImplementedError
