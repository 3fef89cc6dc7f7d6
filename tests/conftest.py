from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.messmate.messmate.attendance.model import AttendanceRecord
from src.messmate.messmate.container import wire_container
from src.messmate.messmate.core.enums import FeedbackStatus, PaymentStatus, RequestStatus, Role
from src.messmate.messmate.core.exceptions import AlreadyExistsError
from src.messmate.messmate.feedback.model import Feedback
from src.messmate.messmate.main import create_app
from src.messmate.messmate.menu.model import MenuItem
from src.messmate.messmate.payments.model import Payment
from src.messmate.messmate.qrcodes.model import DailyQRCode
from src.messmate.messmate.requests.model import LeaveRequest
from src.messmate.messmate.users.model import User

FIXED_NOW = datetime(2026, 10, 19, 12, 30, 0)


class Clock:
    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now


class InMemoryUsers:
    def __init__(self):
        self._next_id = 1
        self.users: dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, email, name, password_hash, role, created_by=None) -> int:
        if self.get_by_email(email):
            raise AlreadyExistsError("A user with this e-mail already exists")
        uid = self._next_id
        self._next_id += 1
        self.users[uid] = User(
            user_id=uid,
            email=email,
            name=name,
            password_hash=password_hash,
            role=role,
            created_by=created_by,
        )
        return uid

    def delete_by_id(self, user_id: int) -> bool:
        return self.users.pop(int(user_id), None) is not None

    def list_all(self):
        return list(self.users.values())

    def add(self, email: str, *, role: Role = Role.USER, password: str = "secret1", name: str = "") -> User:
        uid = self.create_user(
            email=email,
            name=name or email.split("@")[0],
            password_hash=generate_password_hash(password),
            role=role,
            created_by="test",
        )
        return self.users[uid]


class InMemoryMenu:
    def __init__(self):
        self._next_id = 1
        self.items: dict[int, MenuItem] = {}

    def list_all(self):
        return list(self.items.values())

    def get_by_id(self, item_id: int):
        return self.items.get(int(item_id))

    def create(self, *, day, meal_type, items, created_by) -> int:
        iid = self._next_id
        self._next_id += 1
        self.items[iid] = MenuItem(item_id=iid, day=day, meal_type=meal_type, items=items, created_by=created_by)
        return iid

    def update(self, *, item_id, day, meal_type, items) -> bool:
        current = self.items.get(int(item_id))
        if not current:
            return False
        self.items[int(item_id)] = replace(current, day=day, meal_type=meal_type, items=items)
        return True

    def delete(self, *, item_id) -> bool:
        return self.items.pop(int(item_id), None) is not None


class InMemoryQRCodes:
    def __init__(self, clock: Clock):
        self._clock = clock
        self._next_id = 1
        self.codes: dict[int, DailyQRCode] = {}

    def create(self, *, qr_date, qr_value, meal_type, created_by) -> int:
        qid = self._next_id
        self._next_id += 1
        self.codes[qid] = DailyQRCode(
            qr_id=qid,
            qr_date=qr_date,
            qr_value=qr_value,
            meal_type=meal_type,
            created_by=created_by,
            created_at=self._clock.now,
        )
        return qid

    def get_by_value(self, qr_value):
        return next((c for c in self.codes.values() if c.qr_value == qr_value), None)

    def latest_for_date(self, qr_date):
        same_day = [c for c in self.codes.values() if c.qr_date == qr_date]
        return max(same_day, key=lambda c: c.qr_id) if same_day else None


class InMemoryAttendance:
    """Mirrors the UNIQUE (user_id, attend_date) key of the attendance table."""

    def __init__(self, clock: Clock):
        self._clock = clock
        self._next_id = 1
        self.records: dict[int, AttendanceRecord] = {}

    def _find(self, user_id, attend_date):
        return next(
            (r for r in self.records.values() if r.user_id == int(user_id) and r.attend_date == attend_date),
            None,
        )

    def get_for_user_and_date(self, user_id, attend_date):
        return self._find(user_id, attend_date)

    def create(self, *, user_id, user_email, user_name, attend_date, attend_time, meal_type, qr_code_id) -> int:
        if self._find(user_id, attend_date):
            raise AlreadyExistsError("You have already marked attendance for today")
        aid = self._next_id
        self._next_id += 1
        self.records[aid] = AttendanceRecord(
            attendance_id=aid,
            user_id=int(user_id),
            user_email=user_email,
            user_name=user_name,
            attend_date=attend_date,
            attend_time=attend_time,
            meal_type=meal_type,
            qr_code_id=qr_code_id,
            created_at=datetime.combine(attend_date, attend_time),
        )
        return aid

    def list_for_user(self, user_id):
        rows = [r for r in self.records.values() if r.user_id == int(user_id)]
        return sorted(rows, key=lambda r: (r.attend_date, r.attendance_id))

    def list_all(self, *, limit=None):
        rows = sorted(self.records.values(), key=lambda r: (r.attend_date, r.attend_time), reverse=True)
        return rows if limit is None else rows[:limit]

    def count_distinct_users(self) -> int:
        return len({r.user_id for r in self.records.values()})

    def add(self, user_id: int, day: date, *, email: str = "student@example.com", at: time = time(13, 0)) -> int:
        return self.create(
            user_id=user_id,
            user_email=email,
            user_name=None,
            attend_date=day,
            attend_time=at,
            meal_type="general",
            qr_code_id=None,
        )


class InMemoryLeaves:
    def __init__(self, clock: Clock):
        self._clock = clock
        self._next_id = 1
        self.requests: dict[int, LeaveRequest] = {}

    def create_leave(self, *, user_id, user_email, start_date, end_date, meal_type, reason) -> int:
        rid = self._next_id
        self._next_id += 1
        self.requests[rid] = LeaveRequest(
            request_id=rid,
            user_id=int(user_id),
            user_email=user_email,
            start_date=start_date,
            end_date=end_date,
            meal_type=meal_type,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=self._clock.now,
        )
        return rid

    def get_leave(self, *, request_id):
        return self.requests.get(int(request_id))

    def list_leave_requests(self, *, status=None, user_id=None, limit=500):
        rows = [
            r
            for r in self.requests.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == int(user_id))
        ]
        return sorted(rows, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide_leave(self, *, request_id, status, responded_by) -> bool:
        req = self.requests.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.requests[req.request_id] = replace(
            req, status=status, responded_by=responded_by, responded_at=self._clock.now
        )
        return True

    def count_by_status(self, status) -> int:
        return sum(1 for r in self.requests.values() if r.status == status)


class InMemoryFeedback:
    def __init__(self, clock: Clock):
        self._clock = clock
        self._next_id = 1
        self.items: dict[int, Feedback] = {}

    def create(self, *, user_id, user_email, subject, message, rating) -> int:
        fid = self._next_id
        self._next_id += 1
        self.items[fid] = Feedback(
            feedback_id=fid,
            user_id=int(user_id),
            user_email=user_email,
            subject=subject,
            message=message,
            rating=int(rating),
            status=FeedbackStatus.PENDING,
            created_at=self._clock.now,
        )
        return fid

    def get_by_id(self, feedback_id):
        return self.items.get(int(feedback_id))

    def list_all(self, *, status=None, user_id=None, limit=500):
        rows = [
            f
            for f in self.items.values()
            if (status is None or f.status == status) and (user_id is None or f.user_id == int(user_id))
        ]
        return sorted(rows, key=lambda f: f.feedback_id, reverse=True)[:limit]

    def respond(self, *, feedback_id, status, responded_by, admin_response) -> bool:
        item = self.items.get(int(feedback_id))
        if not item or item.status != FeedbackStatus.PENDING:
            return False
        self.items[item.feedback_id] = replace(
            item,
            status=status,
            admin_response=admin_response,
            responded_by=responded_by,
            responded_at=self._clock.now,
        )
        return True

    def count_by_status(self, status) -> int:
        return sum(1 for f in self.items.values() if f.status == status)


class InMemoryPayments:
    def __init__(self, clock: Clock):
        self._clock = clock
        self._next_id = 1
        self.payments: dict[int, Payment] = {}

    def create(self, *, user_id, user_email, amount, month, transaction_id, payment_method) -> int:
        pid = self._next_id
        self._next_id += 1
        self.payments[pid] = Payment(
            payment_id=pid,
            user_id=int(user_id),
            user_email=user_email,
            amount=Decimal(amount),
            month=month,
            transaction_id=transaction_id,
            payment_method=payment_method,
            status=PaymentStatus.PENDING,
            created_at=self._clock.now,
        )
        return pid

    def get_by_id(self, payment_id):
        return self.payments.get(int(payment_id))

    def list_all(self, *, status=None, user_id=None, limit=500):
        rows = [
            p
            for p in self.payments.values()
            if (status is None or p.status == status) and (user_id is None or p.user_id == int(user_id))
        ]
        return sorted(rows, key=lambda p: p.payment_id, reverse=True)[:limit]

    def latest_for_month(self, *, user_id, month):
        rows = [p for p in self.payments.values() if p.user_id == int(user_id) and p.month == month]
        return max(rows, key=lambda p: p.payment_id) if rows else None

    def decide(self, *, payment_id, status, verified_by) -> bool:
        p = self.payments.get(int(payment_id))
        if not p or p.status != PaymentStatus.PENDING:
            return False
        self.payments[p.payment_id] = replace(p, status=status, verified_by=verified_by, verified_at=self._clock.now)
        return True

    def count_by_status(self, status) -> int:
        return sum(1 for p in self.payments.values() if p.status == status)

    def sum_paid(self, *, month=None) -> Decimal:
        return sum(
            (p.amount for p in self.payments.values() if p.status == PaymentStatus.PAID and (month is None or p.month == month)),
            Decimal("0"),
        )


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def repos(clock):
    return SimpleNamespace(
        users_repo=InMemoryUsers(),
        menu_repo=InMemoryMenu(),
        qr_repo=InMemoryQRCodes(clock),
        attendance_repo=InMemoryAttendance(clock),
        leaves_repo=InMemoryLeaves(clock),
        feedback_repo=InMemoryFeedback(clock),
        payments_repo=InMemoryPayments(clock),
    )


@pytest.fixture
def container(repos):
    return wire_container(**vars(repos))


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _sign_in(client, user: User):
    with client.session_transaction() as sess:
        sess["user_id"] = user.user_id
        sess["email"] = user.email
        sess["name"] = user.name
        sess["role"] = user.role.value
    return client


@pytest.fixture
def student(repos):
    return repos.users_repo.add("student@example.com", name="Student One")


@pytest.fixture
def admin(repos):
    return repos.users_repo.add("admin@example.com", role=Role.ADMIN, name="Mess Admin")


@pytest.fixture
def student_client(app, student):
    return _sign_in(app.test_client(), student)


@pytest.fixture
def admin_client(app, admin):
    return _sign_in(app.test_client(), admin)
