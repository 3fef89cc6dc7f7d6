from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import clean_text, require_date, require_non_empty
from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveRequestService:
    def __init__(self, requests: LeaveRequestRepository):
        self._requests = requests

    def create_leave(
        self,
        *,
        user_id: int,
        user_email: str,
        start_date,
        end_date,
        meal_type: Optional[str],
        reason: Optional[str],
    ) -> int:
        if not start_date or not end_date or not clean_text(meal_type) or not clean_text(reason):
            raise ValidationError("Please fill in all fields")

        start = require_date(start_date, "Start date")
        end = require_date(end_date, "End date")
        if end < start:
            raise ValidationError("End date must be on or after the start date")

        request_id = self._requests.create_leave(
            user_id=int(user_id),
            user_email=user_email,
            start_date=start,
            end_date=end,
            meal_type=require_non_empty(meal_type, "Meal type").lower(),
            reason=require_non_empty(reason, "Reason"),
        )
        logger.info("Leave request %s submitted by %s (%s..%s)", request_id, user_email, start, end)
        return request_id

    def list_my_requests(self, *, user_id: int) -> Sequence[LeaveRequest]:
        return list(self._requests.list_leave_requests(user_id=int(user_id)))

    def list_all(self, *, current_role: Role, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to view leave requests")
        return list(self._requests.list_leave_requests(status=status))

    def _decide(self, *, current_role: Role, responded_by: str, request_id: int, status: RequestStatus) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to decide leave requests")

        req = self._requests.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("This request has already been processed")

        if not self._requests.decide_leave(request_id=int(request_id), status=status, responded_by=responded_by):
            raise ValidationError("This request has already been processed")
        logger.info("Leave request %s %s by %s", request_id, status.value, responded_by)

    def approve_leave(self, *, current_role: Role, responded_by: str, request_id: int) -> None:
        self._decide(
            current_role=current_role,
            responded_by=responded_by,
            request_id=request_id,
            status=RequestStatus.APPROVED,
        )

    def reject_leave(self, *, current_role: Role, responded_by: str, request_id: int) -> None:
        self._decide(
            current_role=current_role,
            responded_by=responded_by,
            request_id=request_id,
            status=RequestStatus.REJECTED,
        )

    def approved_in_month(self, *, user_id: int, today: date) -> int:
        """Approved leave requests created in today's calendar month."""

        return sum(
            1
            for r in self._requests.list_leave_requests(user_id=int(user_id), status=RequestStatus.APPROVED)
            if r.created_at and r.created_at.year == today.year and r.created_at.month == today.month
        )

    def count_pending(self) -> int:
        return self._requests.count_by_status(RequestStatus.PENDING)
