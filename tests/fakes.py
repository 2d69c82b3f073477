from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from attendance_payroll.attendance.model import ClockSummary
from attendance_payroll.audit.model import AuditEntry
from attendance_payroll.core.enums import PayslipStatus, RequestStatus
from attendance_payroll.leave.model import LeaveBalance, LeaveRequest
from attendance_payroll.payroll.model import Payslip, PayslipDraft
from attendance_payroll.users.model import Employee

FIXED_NOW = datetime(2024, 9, 15, 12, 0)


@dataclass
class InMemoryUsers:
    employees: list[Employee] = field(default_factory=list)
    join_dates: dict[int, date] = field(default_factory=dict)

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        for e in self.employees:
            if e.user_id == user_id:
                return e
        return None

    def list_employees(self):
        return list(self.employees)

    def get_join_date(self, user_id: int) -> Optional[date]:
        return self.join_dates.get(user_id)


@dataclass
class InMemoryAttendance:
    summaries: list[ClockSummary] = field(default_factory=list)
    calls: int = 0

    def get_clock_summaries(self, *, start_date: date, end_date: date):
        self.calls += 1
        return [s for s in self.summaries if start_date <= s.work_date <= end_date]


class InMemoryLeaves:
    def __init__(self, requests: Optional[list[LeaveRequest]] = None, balances: Optional[list[LeaveBalance]] = None):
        self.requests: dict[int, LeaveRequest] = {r.request_id: r for r in (requests or [])}
        self.balances: dict[tuple[int, str, str], LeaveBalance] = {}
        self.upserts: list[LeaveBalance] = []
        self._request_id = max(self.requests, default=0)
        self._balance_id = 0
        for b in balances or []:
            self._store_balance(b)

    def _store_balance(self, b: LeaveBalance) -> LeaveBalance:
        key = (b.user_id, b.leave_type, b.financial_year)
        existing = self.balances.get(key)
        if existing is not None:
            b = replace(b, balance_id=existing.balance_id, is_probation=None)
        else:
            self._balance_id += 1
            b = replace(b, balance_id=b.balance_id or self._balance_id, is_probation=None)
        self.balances[key] = b
        return b

    # -------- Requests --------
    def list_approved_between(self, *, start_date: date, end_date: date):
        out = [
            r
            for r in self.requests.values()
            if r.status == RequestStatus.APPROVED and r.start_date <= end_date and r.end_date >= start_date
        ]
        out.sort(key=lambda r: (r.start_date, r.request_id))
        return out

    def create_request(self, *, user_id, start_date, end_date, leave_type, reason, session):
        self._request_id += 1
        req = LeaveRequest(
            request_id=self._request_id,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            leave_type=leave_type,
            status=RequestStatus.PENDING,
            session=session,
            reason=reason,
        )
        self.requests[req.request_id] = req
        return req

    def get_request(self, *, request_id: int):
        return self.requests.get(request_id)

    def decide_request(self, *, request_id, status, reviewed_by, admin_notes=None):
        req = self.requests.get(request_id)
        if req is None:
            return None
        req = replace(req, status=status, reviewed_by=reviewed_by, reviewed_at=FIXED_NOW, admin_notes=admin_notes)
        self.requests[request_id] = req
        return req

    def list_history(self, *, user_id: int, limit: int):
        out = [r for r in self.requests.values() if r.user_id == user_id]
        out.sort(key=lambda r: r.start_date, reverse=True)
        return out[:limit]

    # -------- Balances --------
    def list_balances(self, *, user_id: int):
        out = [b for b in self.balances.values() if b.user_id == user_id]
        out.sort(key=lambda b: b.financial_year, reverse=True)
        out.sort(key=lambda b: b.leave_type)
        return out

    def upsert_balance(self, balance: LeaveBalance) -> LeaveBalance:
        self.upserts.append(balance)
        return self._store_balance(balance)


@dataclass
class InMemorySalaries:
    base_salaries: dict[int, Decimal] = field(default_factory=dict)

    def get_base_salary(self, user_id: int) -> Optional[Decimal]:
        return self.base_salaries.get(user_id)


_KEEP_WHEN_NULL = ("payslip_id", "document_url", "company_name", "company_address", "issue_date")


class InMemoryPayslips:
    """Mirrors the MySQL upsert: null identifiers keep stored values, status sticks once released or locked."""

    def __init__(self):
        self.rows: dict[int, Payslip] = {}
        self.saves = 0
        self._id = 0

    def get_by_id(self, record_id: int):
        return self.rows.get(record_id)

    def get_for_period(self, *, user_id: int, month: int, year: int):
        for p in self.rows.values():
            if (p.user_id, p.month, p.year) == (user_id, month, year):
                return p
        return None

    def save(self, draft: PayslipDraft) -> Payslip:
        self.saves += 1
        if draft.record_id is not None:
            existing = self.rows.get(draft.record_id)
        else:
            existing = self.get_for_period(user_id=draft.user_id, month=draft.month, year=draft.year)

        if existing is None:
            self._id += 1
            record_id = self._id
        else:
            record_id = existing.record_id

        kept = {}
        if existing is not None:
            for name in _KEEP_WHEN_NULL:
                if getattr(draft, name) is None:
                    kept[name] = getattr(existing, name)

        status = draft.status
        if existing is not None and (
            existing.is_locked or existing.status in (PayslipStatus.RELEASED, PayslipStatus.LOCKED)
        ):
            status = existing.status

        row = Payslip(
            record_id=record_id,
            user_id=existing.user_id if existing else draft.user_id,
            month=existing.month if existing else draft.month,
            year=existing.year if existing else draft.year,
            payslip_id=kept.get("payslip_id", draft.payslip_id) or "",
            basic_pay=draft.basic_pay,
            hra=draft.hra,
            special_allowance=draft.special_allowance,
            bonus=draft.bonus,
            incentives=draft.incentives,
            other_earnings=draft.other_earnings,
            total_earnings=draft.total_earnings,
            pf_employee=draft.pf_employee,
            pf_employer=draft.pf_employer,
            esi_employee=draft.esi_employee,
            esi_employer=draft.esi_employer,
            professional_tax=draft.professional_tax,
            tds=draft.tds,
            other_deductions=draft.other_deductions,
            total_deductions=draft.total_deductions,
            net_pay=draft.net_pay,
            status=status,
            is_locked=existing.is_locked if existing else False,
            base_salary=draft.base_salary,
            paid_days=draft.paid_days,
            lop_days=draft.lop_days,
            attendance_summary=dict(draft.attendance_summary),
            employee_id=draft.employee_id,
            document_url=kept.get("document_url", draft.document_url),
            company_name=kept.get("company_name", draft.company_name),
            company_address=kept.get("company_address", draft.company_address),
            issue_date=kept.get("issue_date", draft.issue_date),
            created_by=existing.created_by if existing else draft.created_by,
            released_at=existing.released_at if existing else None,
            released_by=existing.released_by if existing else None,
        )
        self.rows[record_id] = row
        return row

    def mark_released(self, *, record_id: int, released_by: int):
        p = self.rows.get(record_id)
        if p is None:
            return None
        p = replace(p, status=PayslipStatus.RELEASED, released_by=released_by, released_at=FIXED_NOW)
        self.rows[record_id] = p
        return p

    def mark_locked(self, *, record_id: int):
        p = self.rows.get(record_id)
        if p is None:
            return None
        p = replace(p, status=PayslipStatus.LOCKED, is_locked=True)
        self.rows[record_id] = p
        return p

    def list_all(self, *, user_id=None, month=None, year=None, status=None, limit=500):
        out = [
            p
            for p in self.rows.values()
            if (user_id is None or p.user_id == user_id)
            and (month is None or p.month == month)
            and (year is None or p.year == year)
            and (status is None or p.status == status)
        ]
        out.sort(key=lambda p: (-p.year, -p.month, p.user_id))
        return out[:limit]


@dataclass
class InMemoryAudit:
    entries: list[AuditEntry] = field(default_factory=list)

    def add(self, entry: AuditEntry) -> None:
        self.entries.append(entry)


class BrokenAudit:
    def add(self, entry: AuditEntry) -> None:
        raise RuntimeError("audit table missing")
