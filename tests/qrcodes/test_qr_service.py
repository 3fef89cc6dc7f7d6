from datetime import date, datetime

import pytest

from src.messmate.messmate.core.enums import Role
from src.messmate.messmate.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.messmate.messmate.qrcodes.service import QRCodeService, build_qr_value


def test_qr_value_format():
    now = datetime(2026, 10, 19, 8, 0, 0)
    value = build_qr_value(now)

    assert value == f"meal-attendance-2026-10-19-{int(now.timestamp() * 1000)}"


def test_issue_for_today(container, repos):
    now = datetime(2026, 10, 19, 8, 0, 0)
    code = container.qr_service.issue_for_today(current_role=Role.ADMIN, created_by="admin@example.com", now=now)

    assert code.qr_date == date(2026, 10, 19)
    assert code.meal_type == "general"
    assert repos.qr_repo.get_by_value(code.qr_value).qr_id == code.qr_id


def test_latest_code_is_active(container):
    first = container.qr_service.issue_for_today(
        current_role=Role.ADMIN, created_by="a@example.com", now=datetime(2026, 10, 19, 8, 0)
    )
    second = container.qr_service.issue_for_today(
        current_role=Role.ADMIN, created_by="a@example.com", now=datetime(2026, 10, 19, 9, 0)
    )

    assert first.qr_value != second.qr_value
    assert container.qr_service.active_for(date(2026, 10, 19)).qr_id == second.qr_id
    assert container.qr_service.active_for(date(2026, 10, 20)) is None


def test_students_cannot_issue(container):
    with pytest.raises(AuthorizationError):
        container.qr_service.issue_for_today(current_role=Role.USER, created_by="s@example.com")


def test_require_active_without_code(container):
    with pytest.raises(NotFoundError):
        container.qr_service.require_active(date(2026, 10, 19))


def test_empty_scan_is_rejected(container):
    with pytest.raises(ValidationError):
        container.qr_service.resolve_for_day("   ", date(2026, 10, 19))


def test_render_png():
    buf = QRCodeService.render_png("meal-attendance-2026-10-19-1")

    assert buf.read(8) == b"\x89PNG\r\n\x1a\n"
