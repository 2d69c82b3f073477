from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PayslipStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, load_json
from .model import Payslip, PayslipDraft
from .repository import PayslipRepository, SalaryRepository

_MONEY_FIELDS = (
    "basic_pay",
    "hra",
    "special_allowance",
    "bonus",
    "incentives",
    "other_earnings",
    "total_earnings",
    "pf_employee",
    "pf_employer",
    "esi_employee",
    "esi_employer",
    "professional_tax",
    "tds",
    "other_deductions",
    "total_deductions",
    "net_pay",
)

_SELECT = """
    SELECT id, user_id, employee_id, month, year, base_salary,
           basic_pay, hra, special_allowance, bonus, incentives, other_earnings, total_earnings,
           pf_employee, pf_employer, esi_employee, esi_employer, professional_tax, tds,
           other_deductions, total_deductions, net_pay,
           paid_days, lop_days, attendance_summary, payslip_id, document_url, status, is_locked,
           released_at, released_by, company_name, company_address, issue_date,
           created_by, created_at, updated_at
    FROM payslips
"""


def _row_to_payslip(r: Dict[str, Any]) -> Payslip:
    money = {name: as_decimal(r.get(name)) for name in _MONEY_FIELDS}
    return Payslip(
        record_id=int(r["id"]),
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        payslip_id=r.get("payslip_id") or "",
        status=PayslipStatus(r.get("status") or PayslipStatus.PENDING.value),
        is_locked=bool(r.get("is_locked")),
        base_salary=as_decimal(r.get("base_salary")) if r.get("base_salary") is not None else None,
        paid_days=as_decimal(r.get("paid_days")),
        lop_days=as_decimal(r.get("lop_days")),
        attendance_summary=load_json(r.get("attendance_summary")),
        employee_id=r.get("employee_id"),
        document_url=r.get("document_url"),
        company_name=r.get("company_name"),
        company_address=r.get("company_address"),
        issue_date=r.get("issue_date"),
        created_by=r.get("created_by"),
        released_at=r.get("released_at"),
        released_by=r.get("released_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        **money,
    )


def _draft_values(d: PayslipDraft) -> Dict[str, Any]:
    return {
        "user_id": int(d.user_id),
        "employee_id": d.employee_id,
        "month": int(d.month),
        "year": int(d.year),
        "base_salary": d.base_salary if d.base_salary is not None else Decimal("0"),
        "basic_pay": d.basic_pay,
        "hra": d.hra,
        "special_allowance": d.special_allowance,
        "bonus": d.bonus,
        "incentives": d.incentives,
        "other_earnings": d.other_earnings,
        "total_earnings": d.total_earnings,
        "pf_employee": d.pf_employee,
        "pf_employer": d.pf_employer,
        "esi_employee": d.esi_employee,
        "esi_employer": d.esi_employer,
        "professional_tax": d.professional_tax,
        "tds": d.tds,
        "other_deductions": d.other_deductions,
        "total_deductions": d.total_deductions,
        "net_pay": d.net_pay,
        "paid_days": d.paid_days,
        "lop_days": d.lop_days,
        "attendance_summary": json.dumps(d.attendance_summary or {}),
        "payslip_id": d.payslip_id,
        "document_url": d.document_url,
        "status": d.status.value,
        "company_name": d.company_name,
        "company_address": d.company_address,
        "issue_date": d.issue_date,
        "created_by": d.created_by,
    }


# Columns that keep their stored value when the payload leaves them null.
_KEEP_WHEN_NULL = {"payslip_id", "document_url", "company_name", "company_address", "issue_date"}
# Columns never rewritten on update.
_INSERT_ONLY = {"user_id", "month", "year", "created_by"}


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_payslip(r) if r else None

    def get_for_period(self, *, user_id: int, month: int, year: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE user_id=%s AND month=%s AND year=%s",
                (int(user_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _row_to_payslip(r) if r else None

    def save(self, draft: PayslipDraft) -> Payslip:
        values = _draft_values(draft)
        with db_cursor(self._conn_factory) as (_, cur):
            if draft.record_id is not None:
                record_id = self._update_by_id(cur, int(draft.record_id), values)
            else:
                record_id = self._insert_or_update(cur, values)
            cur.execute(_SELECT + " WHERE id=%s", (record_id,))
            return _row_to_payslip(fetchone(cur))

    @staticmethod
    def _assignment(col: str, value_expr: str) -> str:
        if col in _KEEP_WHEN_NULL:
            return f"{col}=COALESCE({value_expr}, {col})"
        if col == "status":
            return f"status=IF(is_locked OR status IN ('released', 'locked'), status, {value_expr})"
        return f"{col}={value_expr}"

    def _insert_or_update(self, cur, values: Dict[str, Any]) -> int:
        cols = list(values)
        updates = ", ".join(
            self._assignment(c, f"VALUES({c})") for c in cols if c not in _INSERT_ONLY
        )
        cur.execute(
            f"""
            INSERT INTO payslips({", ".join(cols)})
            VALUES({", ".join(["%s"] * len(cols))})
            ON DUPLICATE KEY UPDATE {updates}, updated_at=NOW(), id=LAST_INSERT_ID(id)
            """,
            tuple(values[c] for c in cols),
        )
        return int(cur.lastrowid)

    def _update_by_id(self, cur, record_id: int, values: Dict[str, Any]) -> int:
        cols = [c for c in values if c not in _INSERT_ONLY]
        cur.execute(
            f"""
            UPDATE payslips
            SET {", ".join(self._assignment(c, "%s") for c in cols)}, updated_at=NOW()
            WHERE id=%s
            """,
            tuple(values[c] for c in cols) + (record_id,),
        )
        return record_id

    def mark_released(self, *, record_id: int, released_by: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payslips
                SET status=%s, released_at=NOW(), released_by=%s, updated_at=NOW()
                WHERE id=%s AND is_locked=0
                """,
                (PayslipStatus.RELEASED.value, int(released_by), int(record_id)),
            )
            cur.execute(_SELECT + " WHERE id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_payslip(r) if r else None

    def mark_locked(self, *, record_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payslips SET status=%s, is_locked=1, updated_at=NOW() WHERE id=%s",
                (PayslipStatus.LOCKED.value, int(record_id)),
            )
            cur.execute(_SELECT + " WHERE id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_payslip(r) if r else None

    def list_all(
        self,
        *,
        user_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[PayslipStatus] = None,
        limit: int = 500,
    ) -> Sequence[Payslip]:
        where = []
        params: list[Any] = []
        if user_id is not None:
            where.append("user_id=%s")
            params.append(int(user_id))
        if month is not None:
            where.append("month=%s")
            params.append(int(month))
        if year is not None:
            where.append("year=%s")
            params.append(int(year))
        if status is not None:
            where.append("status=%s")
            params.append(status.value)

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY year DESC, month DESC, user_id ASC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_payslip(r) for r in fetchall(cur)]


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_base_salary(self, user_id: int) -> Optional[Decimal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT pf_base_salary FROM pf_details WHERE user_id=%s ORDER BY id DESC LIMIT 1",
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r or r.get("pf_base_salary") is None:
                return None
            return as_decimal(r["pf_base_salary"])
