from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .billing.calculator.per_meal_calculator import PerMealBillCalculator
from .billing.service import BillingService
from .core.constants import DEFAULT_CYCLE_DAYS, DEFAULT_MEAL_RATE
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.repository import FeedbackRepository
from .feedback.service import FeedbackService
from .menu.mysql_menu_repository import MySQLMenuRepository
from .menu.repository import MenuRepository
from .menu.service import MenuService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .qrcodes.mysql_qr_repository import MySQLQRCodeRepository
from .qrcodes.repository import QRCodeRepository
from .qrcodes.service import QRCodeService
from .requests.mysql_request_repository import MySQLLeaveRequestRepository
from .requests.repository import LeaveRequestRepository
from .requests.service import LeaveRequestService
from .users.mysql_user_repository import MySQLUserRepository
from .users.policy import RolePolicy
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    role_policy: RolePolicy

    users_repo: UserRepository
    menu_repo: MenuRepository
    qr_repo: QRCodeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRequestRepository
    feedback_repo: FeedbackRepository
    payments_repo: PaymentRepository

    auth_service: AuthService
    user_service: UserService
    menu_service: MenuService
    qr_service: QRCodeService
    attendance_service: AttendanceService
    leave_service: LeaveRequestService
    feedback_service: FeedbackService
    payment_service: PaymentService
    billing_service: BillingService
    dashboard_service: DashboardService


def wire_container(
    *,
    users_repo: UserRepository,
    menu_repo: MenuRepository,
    qr_repo: QRCodeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRequestRepository,
    feedback_repo: FeedbackRepository,
    payments_repo: PaymentRepository,
    conn: Optional[DatabaseConnection] = None,
    meal_rate: int = DEFAULT_MEAL_RATE,
    cycle_days: int = DEFAULT_CYCLE_DAYS,
) -> Container:
    """Build services on top of the given repositories (MySQL in the app, fakes in tests)."""

    role_policy = RolePolicy()

    auth_service = AuthService(users_repo, role_policy)
    user_service = UserService(users_repo, role_policy)
    menu_service = MenuService(menu_repo)
    qr_service = QRCodeService(qr_repo)
    attendance_service = AttendanceService(attendance_repo, qr_service, menu_service, cycle_days=cycle_days)
    leave_service = LeaveRequestService(leaves_repo)
    feedback_service = FeedbackService(feedback_repo)
    payment_service = PaymentService(payments_repo)
    billing_service = BillingService(
        attendance_service,
        leave_service,
        calculator=PerMealBillCalculator(rate=meal_rate),
    )
    dashboard_service = DashboardService(
        attendance=attendance_service,
        billing=billing_service,
        menu=menu_service,
        payments=payment_service,
        leaves=leave_service,
        feedback=feedback_service,
    )

    return Container(
        conn=conn,
        role_policy=role_policy,
        users_repo=users_repo,
        menu_repo=menu_repo,
        qr_repo=qr_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        feedback_repo=feedback_repo,
        payments_repo=payments_repo,
        auth_service=auth_service,
        user_service=user_service,
        menu_service=menu_service,
        qr_service=qr_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        feedback_service=feedback_service,
        payment_service=payment_service,
        billing_service=billing_service,
        dashboard_service=dashboard_service,
    )


def build_container(
    *,
    db_config: dict,
    meal_rate: int = DEFAULT_MEAL_RATE,
    cycle_days: int = DEFAULT_CYCLE_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        menu_repo=MySQLMenuRepository(conn),
        qr_repo=MySQLQRCodeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRequestRepository(conn),
        feedback_repo=MySQLFeedbackRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        meal_rate=meal_rate,
        cycle_days=cycle_days,
    )
