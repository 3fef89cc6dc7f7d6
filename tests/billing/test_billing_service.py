from __future__ import annotations

from datetime import date, datetime, timedelta

from src.messmate.messmate.core.enums import Role


def _approve(container, request_id):
    container.leave_service.approve_leave(current_role=Role.ADMIN, responded_by="admin@example.com", request_id=request_id)


def _leave(container, user_id=1):
    return container.leave_service.create_leave(
        user_id=user_id,
        user_email="student@example.com",
        start_date="2026-10-20",
        end_date="2026-10-21",
        meal_type="lunch",
        reason="Travelling home",
    )


def test_ten_meals_two_approved_leaves(container, repos, clock):
    for offset in range(10):
        repos.attendance_repo.add(1, date(2026, 10, 1) + timedelta(days=offset))

    _approve(container, _leave(container))
    _approve(container, _leave(container))
    _leave(container)  # still pending

    bill = container.billing_service.estimate(user_id=1, today=date(2026, 10, 19))

    assert bill.meals == 10
    assert bill.approved_leaves == 2
    assert bill.amount == 640


def test_leaves_from_previous_month_do_not_count(container, repos, clock):
    repos.attendance_repo.add(1, date(2026, 10, 1))

    clock.now = datetime(2026, 9, 28, 9, 0)
    _approve(container, _leave(container))
    clock.now = datetime(2026, 10, 19, 9, 0)

    bill = container.billing_service.estimate(user_id=1, today=date(2026, 10, 19))

    assert bill.approved_leaves == 0
    assert bill.amount == 80


def test_only_current_cycle_is_billed(container, repos):
    for day in (date(2026, 9, 1), date(2026, 9, 15), date(2026, 10, 1), date(2026, 10, 5)):
        repos.attendance_repo.add(1, day)

    bill = container.billing_service.estimate(user_id=1, today=date(2026, 10, 19))

    # first attendance 1 Sep: cycle 1 runs 1 Oct .. 31 Oct
    assert bill.window.start == date(2026, 10, 1)
    assert bill.meals == 2
    assert bill.amount == 160


def test_no_attendance_means_zero(container):
    bill = container.billing_service.estimate(user_id=1, today=date(2026, 10, 19))

    assert bill.meals == 0
    assert bill.amount == 0
    assert bill.window is None
