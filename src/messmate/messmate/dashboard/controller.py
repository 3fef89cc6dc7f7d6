from __future__ import annotations

import logging

from flask import Flask

from ..common.decorators import admin_required, login_required
from ..common.responses import fail, ok
from ..common.session import current_actor
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        actor = current_actor()
        try:
            summary = container.dashboard_service.student_summary(user_id=actor.user_id)
        except Exception:
            logger.exception("Failed to build dashboard for %s", actor.email)
            return fail("Failed to load dashboard", 500)
        return ok(user={"name": actor.name, "email": actor.email}, **summary.to_dict())

    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @admin_required
    def admin_stats():
        try:
            stats = container.dashboard_service.admin_stats()
        except Exception:
            logger.exception("Failed to compute admin statistics")
            return fail("Failed to load statistics", 500)
        return ok(stats=stats.to_dict())
