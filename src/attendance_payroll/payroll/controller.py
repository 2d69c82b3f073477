from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from flask import Flask, request

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    login_required,
    ok,
    parse_date_arg,
    parse_int_arg,
)
from ..core.enums import PayslipStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from .model import PayslipDraft

_MONEY_FIELDS = (
    "basic_pay",
    "hra",
    "special_allowance",
    "bonus",
    "incentives",
    "other_earnings",
    "pf_employee",
    "pf_employer",
    "esi_employee",
    "esi_employer",
    "professional_tax",
    "tds",
    "other_deductions",
)


def _decimal(value: Any, field_name: str) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")


def _draft_from_json(data: dict) -> PayslipDraft:
    status = data.get("status") or PayslipStatus.PENDING.value
    try:
        status = PayslipStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown payslip status: {status}")

    issue_date = data.get("issue_date")
    record_id = parse_int_arg(data.get("id"), "id", required=False)
    return PayslipDraft(
        user_id=parse_int_arg(data.get("user_id"), "user_id"),
        month=parse_int_arg(data.get("month"), "month"),
        year=parse_int_arg(data.get("year"), "year"),
        base_salary=_decimal(data["base_salary"], "base_salary") if data.get("base_salary") is not None else None,
        paid_days=_decimal(data.get("paid_days"), "paid_days"),
        lop_days=_decimal(data.get("lop_days"), "lop_days"),
        attendance_summary=data.get("attendance_summary") or {},
        status=status,
        payslip_id=data.get("payslip_id"),
        employee_id=data.get("employee_id"),
        document_url=data.get("document_url"),
        company_name=data.get("company_name"),
        company_address=data.get("company_address"),
        issue_date=parse_date_arg(issue_date, "issue_date") if issue_date else None,
        record_id=record_id,
        **{name: _decimal(data.get(name), name) for name in _MONEY_FIELDS},
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payslips/generate", methods=["POST"], endpoint="generate_payslips")
    @admin_required
    def generate_payslips():
        data = request.get_json(silent=True) or {}
        today = date.today()
        report = container.payslip_service.generate_from_attendance(
            parse_int_arg(data.get("month", today.month), "month"),
            parse_int_arg(data.get("year", today.year), "year"),
            current_user_id(),
            target_user_id=parse_int_arg(data.get("user_id"), "user_id", required=False),
        )
        message = f"Generated {len(report.payslips)} payslip(s)"
        if not report.payslips and not report.failures:
            message = "No attendance data found for the selected month"
        return ok(report.to_dict(), message=message)

    @app.route("/api/payslips", methods=["PUT"], endpoint="upsert_payslip")
    @admin_required
    def upsert_payslip():
        data = request.get_json(silent=True) or {}
        payslip = container.payslip_service.upsert_payslip(
            _draft_from_json(data),
            actor_id=current_user_id(),
            allow_admin_override=bool(data.get("admin_override")),
        )
        return ok(payslip.to_dict())

    @app.route("/api/payslips/<int:record_id>/release", methods=["POST"], endpoint="release_payslip")
    @admin_required
    def release_payslip(record_id: int):
        payslip = container.payslip_service.release_payslip(record_id, current_user_id())
        return ok(payslip.to_dict(), message="Payslip released")

    @app.route("/api/payslips/<int:record_id>/lock", methods=["POST"], endpoint="lock_payslip")
    @admin_required
    def lock_payslip(record_id: int):
        payslip = container.payslip_service.lock_payslip(record_id, current_user_id())
        return ok(payslip.to_dict(), message="Payslip locked")

    @app.route("/api/payslips", methods=["GET"], endpoint="list_payslips")
    @login_required
    def list_payslips():
        user_id = parse_int_arg(request.args.get("user_id"), "user_id", required=False)
        if current_role() != Role.ADMIN:
            # Staff only ever see their own slips.
            user_id = current_user_id()
        payslips = container.payslip_service.list_payslips(
            user_id=user_id,
            month=parse_int_arg(request.args.get("month"), "month", required=False),
            year=parse_int_arg(request.args.get("year"), "year", required=False),
            status=request.args.get("status") or None,
        )
        return ok([p.to_dict() for p in payslips])

    @app.route("/api/payslips/<int:record_id>", methods=["GET"], endpoint="get_payslip")
    @login_required
    def get_payslip(record_id: int):
        payslip = container.payslip_service.get_payslip(record_id)
        if current_role() != Role.ADMIN and payslip.user_id != current_user_id():
            raise AuthorizationError("You can only view your own payslips")
        return ok(payslip.to_dict())
