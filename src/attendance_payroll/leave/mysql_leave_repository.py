from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

_REQUEST_COLUMNS = """
    id, user_id, start_date, end_date, leave_type, session, reason, status,
    created_at, reviewed_by, reviewed_at, admin_notes
"""

_BALANCE_COLUMNS = """
    id, user_id, leave_type, financial_year, opening_balance, availed, lapse, lapse_date, balance
"""


def _row_to_request(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_type=r["leave_type"],
        status=RequestStatus(r["status"]),
        session=r.get("session") or "Full Day",
        reason=r.get("reason"),
        created_at=r.get("created_at"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        admin_notes=r.get("admin_notes"),
    )


def _row_to_balance(r: Dict[str, Any]) -> LeaveBalance:
    return LeaveBalance(
        balance_id=int(r["id"]),
        user_id=int(r["user_id"]),
        leave_type=r["leave_type"],
        financial_year=str(r["financial_year"]),
        opening_balance=as_float(r.get("opening_balance")),
        availed=as_float(r.get("availed")),
        lapse=as_float(r.get("lapse")),
        lapse_date=r.get("lapse_date"),
        balance=as_float(r.get("balance")),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Leave requests --------
    def list_approved_between(self, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_REQUEST_COLUMNS}
                FROM leave_requests
                WHERE status=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date ASC, id ASC
                """,
                (RequestStatus.APPROVED.value, end_date, start_date),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def create_request(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        leave_type: str,
        reason: Optional[str],
        session: str,
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, start_date, end_date, leave_type, reason, status, session)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), start_date, end_date, leave_type, reason, RequestStatus.PENDING.value, session),
            )
            request_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE id=%s", (request_id,))
            return _row_to_request(fetchone(cur))

    def get_request(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def decide_request(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        reviewed_by: int,
        admin_notes: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, reviewed_at=NOW(), admin_notes=%s
                WHERE id=%s
                """,
                (status.value, int(reviewed_by), admin_notes, int(request_id)),
            )
            if cur.rowcount <= 0:
                return None
            cur.execute(f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_history(self, *, user_id: int, limit: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_REQUEST_COLUMNS}
                FROM leave_requests
                WHERE user_id=%s
                ORDER BY start_date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    # -------- Balances --------
    def list_balances(self, *, user_id: int) -> Sequence[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BALANCE_COLUMNS}
                FROM leave_balances
                WHERE user_id=%s
                ORDER BY leave_type, financial_year DESC
                """,
                (int(user_id),),
            )
            return [_row_to_balance(r) for r in fetchall(cur)]

    def upsert_balance(self, balance: LeaveBalance) -> LeaveBalance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_balances(
                    user_id, leave_type, financial_year, opening_balance, availed, lapse, lapse_date, balance
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    opening_balance=VALUES(opening_balance),
                    availed=VALUES(availed),
                    lapse=VALUES(lapse),
                    lapse_date=VALUES(lapse_date),
                    balance=VALUES(balance),
                    updated_at=NOW()
                """,
                (
                    int(balance.user_id),
                    balance.leave_type,
                    balance.financial_year,
                    balance.opening_balance,
                    balance.availed,
                    balance.lapse,
                    balance.lapse_date,
                    balance.balance,
                ),
            )
            cur.execute(
                f"""
                SELECT {_BALANCE_COLUMNS}
                FROM leave_balances
                WHERE user_id=%s AND leave_type=%s AND financial_year=%s
                """,
                (int(balance.user_id), balance.leave_type, balance.financial_year),
            )
            return _row_to_balance(fetchone(cur))
