from __future__ import annotations

import logging

from flask import Flask, request

from ..common.decorators import admin_required, login_required
from ..common.responses import domain_error, fail, json_body, ok
from ..common.session import current_actor
from ..core.enums import FeedbackStatus
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/feedback", methods=["POST"], endpoint="submit_feedback")
    @login_required
    def submit_feedback():
        data = json_body()
        actor = current_actor()
        try:
            feedback_id = container.feedback_service.submit(
                user_id=actor.user_id,
                user_email=actor.email,
                subject=data.get("subject"),
                message=data.get("message"),
                rating=data.get("rating"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to submit feedback for %s", actor.email)
            return fail("Failed to submit feedback", 500)
        return ok(201, message="Thank you for your feedback", feedback_id=feedback_id)

    @app.route("/api/feedback/me", methods=["GET"], endpoint="my_feedback")
    @login_required
    def my_feedback():
        try:
            items = container.feedback_service.list_mine(user_id=current_actor().user_id)
        except Exception:
            logger.exception("Failed to load feedback")
            return fail("Failed to load feedback", 500)
        return ok(feedback=[f.to_dict() for f in items])

    @app.route("/api/admin/feedback", methods=["GET"], endpoint="admin_feedback")
    @admin_required
    def admin_feedback():
        status_arg = (request.args.get("status") or "").strip().lower()
        try:
            status = FeedbackStatus(status_arg) if status_arg else None
        except ValueError:
            return fail("Unknown status filter")
        try:
            items = container.feedback_service.list_all(current_role=current_actor().role, status=status)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to load feedback")
            return fail("Failed to load feedback", 500)
        return ok(feedback=[f.to_dict() for f in items])

    @app.route("/api/admin/feedback/<int:feedback_id>/resolve", methods=["POST"], endpoint="resolve_feedback")
    @admin_required
    def resolve_feedback(feedback_id: int):
        data = json_body()
        actor = current_actor()
        try:
            container.feedback_service.resolve(
                current_role=actor.role,
                responded_by=actor.email,
                feedback_id=feedback_id,
                response=data.get("response", ""),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to resolve feedback %s", feedback_id)
            return fail("Failed to update feedback", 500)
        return ok(message="Feedback marked as resolved")

    @app.route("/api/admin/feedback/<int:feedback_id>/reject", methods=["POST"], endpoint="reject_feedback")
    @admin_required
    def reject_feedback(feedback_id: int):
        data = json_body()
        actor = current_actor()
        try:
            container.feedback_service.reject(
                current_role=actor.role,
                responded_by=actor.email,
                feedback_id=feedback_id,
                response=data.get("response", ""),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to reject feedback %s", feedback_id)
            return fail("Failed to update feedback", 500)
        return ok(message="Feedback rejected")
