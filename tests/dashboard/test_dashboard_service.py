from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from src.messmate.messmate.core.enums import Role


def test_student_summary(container, repos):
    repos.menu_repo.create(day="Monday", meal_type="lunch", items="Rice, Dal", created_by="admin")
    repos.attendance_repo.add(3, date(2026, 10, 1))
    repos.attendance_repo.add(3, date(2026, 10, 19))
    container.payment_service.submit(
        user_id=3,
        user_email="student@example.com",
        amount="160",
        month="October 2026",
        transaction_id="T1",
        payment_method="cash",
    )

    summary = container.dashboard_service.student_summary(user_id=3, now=datetime(2026, 10, 19, 14, 0))

    assert summary.attendance_count == 2
    assert summary.bill.amount == 160
    assert summary.attended_today is True
    assert [i.items for i in summary.todays_menu] == ["Rice, Dal"]
    assert summary.payment_month == "October 2026"
    assert summary.payment_status == "pending"
    assert summary.to_dict()["estimated_bill"] == 160


def test_admin_stats(container, repos):
    repos.attendance_repo.add(1, date(2026, 10, 18))
    repos.attendance_repo.add(1, date(2026, 10, 19))
    repos.attendance_repo.add(2, date(2026, 10, 19))

    pid = container.payment_service.submit(
        user_id=1, user_email="a@example.com", amount="500", month="October 2026", transaction_id="T", payment_method="upi"
    )
    container.payment_service.verify(current_role=Role.ADMIN, verified_by="admin@example.com", payment_id=pid)
    container.feedback_service.submit(user_id=1, user_email="a@example.com", subject="s", message="m", rating=5)
    container.leave_service.create_leave(
        user_id=2,
        user_email="b@example.com",
        start_date="2026-10-20",
        end_date="2026-10-20",
        meal_type="lunch",
        reason="Exam",
    )

    stats = container.dashboard_service.admin_stats(today=date(2026, 10, 19))

    assert stats.unique_users == 2
    assert stats.monthly_revenue == Decimal("500.00")
    assert stats.total_revenue == Decimal("500.00")
    assert stats.pending_feedback == 1
    assert stats.pending_leaves == 1
    assert stats.pending_payments == 0
