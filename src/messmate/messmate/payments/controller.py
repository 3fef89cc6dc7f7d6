from __future__ import annotations

import logging

from flask import Flask, request

from ..common.datetime_utils import month_label, now_local
from ..common.decorators import admin_required, login_required
from ..common.responses import domain_error, fail, json_body, ok
from ..common.session import current_actor
from ..core.enums import PaymentStatus
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["POST"], endpoint="submit_payment")
    @login_required
    def submit_payment():
        data = json_body()
        actor = current_actor()
        try:
            payment_id = container.payment_service.submit(
                user_id=actor.user_id,
                user_email=actor.email,
                amount=data.get("amount"),
                month=data.get("month"),
                transaction_id=data.get("transaction_id"),
                payment_method=data.get("payment_method"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to submit payment for %s", actor.email)
            return fail("Failed to submit payment", 500)
        return ok(201, message="Payment submitted for verification", payment_id=payment_id)

    @app.route("/api/payments/me", methods=["GET"], endpoint="my_payments")
    @login_required
    def my_payments():
        try:
            payments = container.payment_service.list_mine(user_id=current_actor().user_id)
        except Exception:
            logger.exception("Failed to load payments")
            return fail("Failed to load payments", 500)
        return ok(payments=[p.to_dict() for p in payments])

    @app.route("/api/payments/me/status", methods=["GET"], endpoint="my_payment_status")
    @login_required
    def my_payment_status():
        today = now_local().date()
        try:
            status = container.payment_service.status_for(user_id=current_actor().user_id, today=today)
        except Exception:
            logger.exception("Failed to load payment status")
            return fail("Failed to load payment status", 500)
        return ok(month=month_label(today), status=status)

    @app.route("/api/admin/payments", methods=["GET"], endpoint="admin_payments")
    @admin_required
    def admin_payments():
        status_arg = (request.args.get("status") or "").strip().lower()
        try:
            status = PaymentStatus(status_arg) if status_arg else None
        except ValueError:
            return fail("Unknown status filter")
        try:
            payments = container.payment_service.list_all(current_role=current_actor().role, status=status)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to load payments")
            return fail("Failed to load payments", 500)
        return ok(payments=[p.to_dict() for p in payments])

    @app.route("/api/admin/payments/<int:payment_id>/verify", methods=["POST"], endpoint="verify_payment")
    @admin_required
    def verify_payment(payment_id: int):
        actor = current_actor()
        try:
            container.payment_service.verify(
                current_role=actor.role,
                verified_by=actor.email,
                payment_id=payment_id,
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to verify payment %s", payment_id)
            return fail("Failed to update payment", 500)
        return ok(message="Payment verified")

    @app.route("/api/admin/payments/<int:payment_id>/reject", methods=["POST"], endpoint="reject_payment")
    @admin_required
    def reject_payment(payment_id: int):
        actor = current_actor()
        try:
            container.payment_service.reject(
                current_role=actor.role,
                verified_by=actor.email,
                payment_id=payment_id,
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to reject payment %s", payment_id)
            return fail("Failed to update payment", 500)
        return ok(message="Payment rejected")
