from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.repository import AuditRepository
from .audit.service import AuditTrail
from .core.constants import DEFAULT_ATTENDANCE_TIMEZONE, DEFAULT_CLOCK_STORAGE_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .payroll.mysql_payslip_repository import MySQLPayslipRepository, MySQLSalaryRepository
from .payroll.repository import PayslipRepository, SalaryRepository
from .payroll.service import PayslipService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection | None

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    payslip_repo: PayslipRepository
    salary_repo: SalaryRepository
    audit_repo: AuditRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    payslip_service: PayslipService


def wire_services(
    *,
    conn: DatabaseConnection | None,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    payslip_repo: PayslipRepository,
    salary_repo: SalaryRepository,
    audit_repo: AuditRepository,
    attendance_timezone: str = DEFAULT_ATTENDANCE_TIMEZONE,
    clock_storage_timezone: str = DEFAULT_CLOCK_STORAGE_TIMEZONE,
) -> Container:
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        leave_repo,
        strategy_factory=AttendanceStrategyFactory(),
        default_timezone=attendance_timezone,
        storage_timezone=clock_storage_timezone,
    )
    leave_service = LeaveService(leave_repo, users_repo)
    payslip_service = PayslipService(payslip_repo, salary_repo, attendance_service, AuditTrail(audit_repo))

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payslip_repo=payslip_repo,
        salary_repo=salary_repo,
        audit_repo=audit_repo,
        attendance_service=attendance_service,
        leave_service=leave_service,
        payslip_service=payslip_service,
    )


def build_container(
    *,
    db_config: dict,
    attendance_timezone: str = DEFAULT_ATTENDANCE_TIMEZONE,
    clock_storage_timezone: str = DEFAULT_CLOCK_STORAGE_TIMEZONE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(
            conn,
            default_timezone=attendance_timezone,
            storage_timezone=clock_storage_timezone,
        ),
        leave_repo=MySQLLeaveRepository(conn),
        payslip_repo=MySQLPayslipRepository(conn),
        salary_repo=MySQLSalaryRepository(conn),
        audit_repo=MySQLAuditRepository(conn),
        attendance_timezone=attendance_timezone,
        clock_storage_timezone=clock_storage_timezone,
    )
