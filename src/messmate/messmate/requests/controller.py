from __future__ import annotations

import logging

from flask import Flask, request

from ..common.decorators import admin_required, login_required
from ..common.responses import domain_error, fail, json_body, ok
from ..common.session import current_actor
from ..core.enums import RequestStatus
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @login_required
    def create_leave():
        data = json_body()
        actor = current_actor()
        try:
            request_id = container.leave_service.create_leave(
                user_id=actor.user_id,
                user_email=actor.email,
                start_date=data.get("start_date"),
                end_date=data.get("end_date"),
                meal_type=data.get("meal_type"),
                reason=data.get("reason"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to submit leave request for %s", actor.email)
            return fail("Failed to submit leave request", 500)
        return ok(201, message="Leave request submitted successfully", request_id=request_id)

    @app.route("/api/leaves/me", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        try:
            leaves = container.leave_service.list_my_requests(user_id=current_actor().user_id)
        except Exception:
            logger.exception("Failed to load leave requests")
            return fail("Failed to load leave requests", 500)
        return ok(leaves=[r.to_dict() for r in leaves])

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        status_arg = (request.args.get("status") or "").strip().lower()
        try:
            status = RequestStatus(status_arg) if status_arg else None
        except ValueError:
            return fail("Unknown status filter")
        try:
            leaves = container.leave_service.list_all(current_role=current_actor().role, status=status)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to load leave requests")
            return fail("Failed to load leave requests", 500)
        return ok(leaves=[r.to_dict() for r in leaves])

    @app.route("/api/admin/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    def approve_leave(request_id: int):
        actor = current_actor()
        try:
            container.leave_service.approve_leave(
                current_role=actor.role,
                responded_by=actor.email,
                request_id=request_id,
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to approve leave request %s", request_id)
            return fail("Failed to update leave request", 500)
        return ok(message="Leave request approved")

    @app.route("/api/admin/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @admin_required
    def reject_leave(request_id: int):
        actor = current_actor()
        try:
            container.leave_service.reject_leave(
                current_role=actor.role,
                responded_by=actor.email,
                request_id=request_id,
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to reject leave request %s", request_id)
            return fail("Failed to update leave request", 500)
        return ok(message="Leave request rejected")
