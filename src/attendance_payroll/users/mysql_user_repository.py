from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_strict_iso_date
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import UserRepository

_EMPLOYEE_COLUMNS = """
    u.id AS user_id, u.email, COALESCE(u.full_name, p.full_name) AS full_name,
    u.role, u.timezone, e.employee_code
"""


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    try:
        role = Role(r.get("role") or Role.STAFF.value)
    except ValueError:
        role = Role.STAFF
    return Employee(
        user_id=int(r["user_id"]),
        email=r["email"],
        full_name=r.get("full_name"),
        role=role,
        timezone=r.get("timezone"),
        employee_code=r.get("employee_code"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM users u
                LEFT JOIN profiles p ON p.id = u.id
                LEFT JOIN employee e ON e.profile_id = p.id
                WHERE u.id=%s
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM users u
                LEFT JOIN profiles p ON p.id = u.id
                LEFT JOIN employee e ON e.profile_id = p.id
                ORDER BY u.id
                """
            )
            seen: set[int] = set()
            out: list[Employee] = []
            for r in fetchall(cur):
                emp = _row_to_employee(r)
                # One user may have several employee rows; the first one wins.
                if emp.user_id in seen:
                    continue
                seen.add(emp.user_id)
                out.append(emp)
            return out

    def get_join_date(self, user_id: int) -> Optional[date]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.join_date, e.joining_date
                FROM users u
                LEFT JOIN profiles p ON p.id = u.id
                LEFT JOIN employee e ON e.profile_id = p.id
                WHERE u.id=%s
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            if r.get("join_date"):
                return parse_strict_iso_date(r["join_date"])
            return parse_strict_iso_date(r.get("joining_date"))
