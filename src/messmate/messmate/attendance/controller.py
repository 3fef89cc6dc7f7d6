from __future__ import annotations

import logging

from flask import Flask, Response

from ..common.datetime_utils import now_local
from ..common.decorators import admin_required, login_required
from ..common.responses import domain_error, fail, json_body, ok
from ..common.session import current_actor
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/scan", methods=["POST"], endpoint="verify_scan")
    @login_required
    def verify_scan():
        data = json_body()
        try:
            scan = container.attendance_service.verify_scan(data.get("qr_data", ""))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to verify QR code")
            return fail("Failed to verify QR code", 500)
        return ok(
            message="QR code verified",
            qr_code=scan.qr_code.to_dict(),
            menu=[i.to_dict() for i in scan.menu],
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = json_body()
        actor = current_actor()
        try:
            record = container.attendance_service.mark_attendance(
                user_id=actor.user_id,
                user_email=actor.email,
                user_name=actor.name,
                qr_data=data.get("qr_data", ""),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to mark attendance for %s", actor.email)
            return fail("Failed to mark attendance", 500)
        return ok(201, message="Attendance marked successfully", attendance=record.to_dict())

    @app.route("/api/attendance/me", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        actor = current_actor()
        try:
            cycle = container.attendance_service.cycle_for(actor.user_id, now_local().date())
        except Exception:
            logger.exception("Failed to load attendance for %s", actor.email)
            return fail("Failed to load attendance", 500)
        window = cycle.window
        return ok(
            attendance=[r.to_dict() for r in cycle.records],
            count=cycle.count,
            cycle_start=window.start.isoformat() if window else None,
            cycle_end=window.end.isoformat() if window else None,
        )

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="all_attendance")
    @admin_required
    def all_attendance():
        try:
            records = container.attendance_service.list_all(current_role=current_actor().role)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to load attendance")
            return fail("Failed to load attendance", 500)
        return ok(attendance=[r.to_dict() for r in records])

    @app.route("/api/admin/attendance.csv", methods=["GET"], endpoint="export_attendance")
    @admin_required
    def export_attendance():
        try:
            filename, content = container.attendance_service.export_csv(current_role=current_actor().role)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to export attendance")
            return fail("Failed to export attendance", 500)
        return Response(
            content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
