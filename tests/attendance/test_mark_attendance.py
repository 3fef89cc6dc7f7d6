from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.messmate.messmate.core.enums import Role
from src.messmate.messmate.core.exceptions import AlreadyExistsError, AuthorizationError, ValidationError

FIXED_NOW = datetime(2026, 10, 19, 12, 30, 0)


def _issue(container, now=FIXED_NOW):
    return container.qr_service.issue_for_today(current_role=Role.ADMIN, created_by="admin@example.com", now=now)


def _mark(container, qr_value, now=FIXED_NOW, user_id=7):
    return container.attendance_service.mark_attendance(
        user_id=user_id,
        user_email="student@example.com",
        user_name="Student",
        qr_data=qr_value,
        now=now,
    )


def test_first_mark_creates_one_general_row(container, repos):
    code = _issue(container)

    record = _mark(container, code.qr_value)

    rows = list(repos.attendance_repo.records.values())
    assert len(rows) == 1
    assert rows[0].attend_date == date(2026, 10, 19)
    assert rows[0].meal_type == "general"
    assert rows[0].qr_code_id == code.qr_id
    assert record.attend_time.strftime("%H:%M:%S") == "12:30:00"


def test_meal_type_falls_back_to_general_when_code_has_none(container, repos):
    repos.qr_repo.create(qr_date=FIXED_NOW.date(), qr_value="legacy-code", meal_type=None, created_by=None)

    record = _mark(container, "legacy-code")

    assert record.meal_type == "general"


def test_second_mark_same_day_is_rejected(container, repos):
    code = _issue(container)
    _mark(container, code.qr_value)

    with pytest.raises(AlreadyExistsError, match="already marked attendance"):
        _mark(container, code.qr_value, now=FIXED_NOW + timedelta(hours=2))

    assert len(repos.attendance_repo.records) == 1


def test_duplicate_insert_past_precheck_is_still_rejected(container, repos, monkeypatch):
    code = _issue(container)
    _mark(container, code.qr_value)

    # another request raced past the lookup; the unique key must still hold
    monkeypatch.setattr(repos.attendance_repo, "get_for_user_and_date", lambda user_id, day: None)

    with pytest.raises(AlreadyExistsError):
        _mark(container, code.qr_value)

    assert len(repos.attendance_repo.records) == 1


def test_other_user_can_mark_same_day(container, repos):
    code = _issue(container)
    _mark(container, code.qr_value, user_id=1)
    _mark(container, code.qr_value, user_id=2)

    assert repos.attendance_repo.count_distinct_users() == 2


def test_unknown_qr_value_is_invalid(container):
    _issue(container)

    with pytest.raises(ValidationError, match="Invalid QR code"):
        _mark(container, "meal-attendance-2026-10-19-000")


def test_yesterdays_code_is_not_valid_today(container):
    code = _issue(container, now=FIXED_NOW - timedelta(days=1))

    with pytest.raises(ValidationError, match="not valid for today"):
        _mark(container, code.qr_value)


def test_verify_scan_returns_todays_menu(container, repos):
    repos.menu_repo.create(day="Monday", meal_type="lunch", items="Rice, Dal", created_by="admin")
    repos.menu_repo.create(day="Tuesday", meal_type="lunch", items="Upma", created_by="admin")
    code = _issue(container)

    scan = container.attendance_service.verify_scan(code.qr_value, now=FIXED_NOW)

    assert scan.qr_code.qr_id == code.qr_id
    assert [m.items for m in scan.menu] == ["Rice, Dal"]


def test_list_all_requires_admin(container):
    with pytest.raises(AuthorizationError):
        container.attendance_service.list_all(current_role=Role.USER)


def test_has_attended(container, repos):
    repos.attendance_repo.add(7, date(2026, 10, 19))

    assert container.attendance_service.has_attended(7, date(2026, 10, 19))
    assert not container.attendance_service.has_attended(7, date(2026, 10, 18))
