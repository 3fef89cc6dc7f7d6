from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.messmate.messmate.core.enums import PaymentStatus, Role
from src.messmate.messmate.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _submit(container, **overrides):
    data = dict(
        user_id=3,
        user_email="student@example.com",
        amount="2400",
        month="October 2026",
        transaction_id="UPI-123",
        payment_method="UPI",
    )
    data.update(overrides)
    return container.payment_service.submit(**data)


def test_submit_starts_pending(container, repos):
    pid = _submit(container)

    p = repos.payments_repo.get_by_id(pid)
    assert p.status == PaymentStatus.PENDING
    assert p.amount == Decimal("2400.00")
    assert p.payment_method == "upi"


@pytest.mark.parametrize("amount", ["0", "-5", "abc"])
def test_amount_must_be_positive(container, amount):
    with pytest.raises(ValidationError, match="Amount"):
        _submit(container, amount=amount)


@pytest.mark.parametrize("field", ["amount", "month", "transaction_id", "payment_method"])
def test_missing_field(container, field):
    with pytest.raises(ValidationError, match="fill in all fields"):
        _submit(container, **{field: ""})


def test_status_defaults_to_unpaid(container):
    assert container.payment_service.status_for(user_id=3, today=date(2026, 10, 19)) == "unpaid"


def test_status_follows_latest_payment_of_current_month(container):
    first = _submit(container)
    container.payment_service.reject(current_role=Role.ADMIN, verified_by="admin@example.com", payment_id=first)
    second = _submit(container, transaction_id="UPI-456")

    assert container.payment_service.status_for(user_id=3, today=date(2026, 10, 19)) == "pending"

    container.payment_service.verify(current_role=Role.ADMIN, verified_by="admin@example.com", payment_id=second)
    assert container.payment_service.status_for(user_id=3, today=date(2026, 10, 19)) == "paid"


def test_other_month_does_not_affect_status(container):
    _submit(container, month="September 2026")

    assert container.payment_service.status_for(user_id=3, today=date(2026, 10, 19)) == "unpaid"


def test_verify_records_verifier(container, repos):
    pid = _submit(container)

    container.payment_service.verify(current_role=Role.ADMIN, verified_by="admin@example.com", payment_id=pid)

    p = repos.payments_repo.get_by_id(pid)
    assert p.status == PaymentStatus.PAID
    assert p.verified_by == "admin@example.com"
    assert p.verified_at is not None


def test_verify_missing_payment(container):
    with pytest.raises(NotFoundError):
        container.payment_service.verify(current_role=Role.ADMIN, verified_by="admin@example.com", payment_id=9)


def test_only_admin_verifies(container):
    pid = _submit(container)
    with pytest.raises(AuthorizationError):
        container.payment_service.verify(current_role=Role.USER, verified_by="s@example.com", payment_id=pid)


def test_revenue(container):
    a = _submit(container, amount="1000")
    b = _submit(container, amount="500", month="September 2026")
    _submit(container, amount="700")
    for pid in (a, b):
        container.payment_service.verify(current_role=Role.ADMIN, verified_by="admin@example.com", payment_id=pid)

    assert container.payment_service.monthly_revenue(date(2026, 10, 19)) == Decimal("1000.00")
    assert container.payment_service.total_revenue() == Decimal("1500.00")
    assert container.payment_service.count_pending() == 1
