from __future__ import annotations

import logging

from flask import Flask, send_file

from ..common.datetime_utils import now_local
from ..common.decorators import admin_required, login_required
from ..common.responses import domain_error, fail, ok
from ..common.session import current_actor
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/qr/today", methods=["GET"], endpoint="todays_qr")
    @login_required
    def todays_qr():
        try:
            code = container.qr_service.active_for(now_local().date())
        except Exception:
            logger.exception("Failed to load today's QR code")
            return fail("Failed to load QR code", 500)
        return ok(qr_code=code.to_dict() if code else None)

    @app.route("/api/admin/qr", methods=["POST"], endpoint="generate_qr")
    @admin_required
    def generate_qr():
        actor = current_actor()
        try:
            code = container.qr_service.issue_for_today(current_role=actor.role, created_by=actor.email)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to generate QR code")
            return fail("Failed to generate QR code", 500)
        return ok(201, message="Today's attendance QR code is ready", qr_code=code.to_dict())

    @app.route("/api/admin/qr/image", methods=["GET"], endpoint="admin_qr_image")
    @admin_required
    def admin_qr_image():
        """PNG of today's active code, for printing at the counter."""

        try:
            code = container.qr_service.require_active(now_local().date())
            buf = container.qr_service.render_png(code.qr_value)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to render QR code image")
            return fail("Failed to render QR code", 500)
        return send_file(buf, mimetype="image/png")
