from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import RequestStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create_leave(
        self,
        *,
        user_id: int,
        user_email: str,
        start_date: date,
        end_date: date,
        meal_type: str,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def decide_leave(self, *, request_id: int, status: RequestStatus, responded_by: str) -> bool:
        """Only pending requests can be decided. Returns False when nothing was updated."""

        raise NotImplementedError

    def count_by_status(self, status: RequestStatus) -> int:
        raise NotImplementedError
