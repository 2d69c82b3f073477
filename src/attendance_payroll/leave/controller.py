from __future__ import annotations

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
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave/balances", methods=["GET"], endpoint="my_leave_balances")
    @login_required
    def my_leave_balances():
        balances = container.leave_service.get_leave_balances(current_user_id())
        return ok([b.to_dict() for b in balances])

    @app.route("/api/leave/balances/<int:user_id>", methods=["GET"], endpoint="user_leave_balances")
    @admin_required
    def user_leave_balances(user_id: int):
        balances = container.leave_service.get_leave_balances(user_id)
        return ok([b.to_dict() for b in balances])

    @app.route("/api/leave/balances", methods=["PUT"], endpoint="set_leave_balance")
    @admin_required
    def set_leave_balance():
        data = request.get_json(silent=True) or {}
        lapse_date = data.get("lapse_date")
        balance = container.leave_service.set_leave_balance(
            current_role=current_role(),
            user_id=parse_int_arg(data.get("user_id"), "user_id"),
            leave_type=data.get("leave_type") or "",
            financial_year=data.get("financial_year") or "",
            opening_balance=data.get("opening_balance", 0),
            availed=data.get("availed", 0),
            lapse=data.get("lapse", 0),
            lapse_date=parse_date_arg(lapse_date, "lapse_date") if lapse_date else None,
        )
        return ok(balance.to_dict())

    @app.route("/api/leave/requests", methods=["POST"], endpoint="create_leave_request")
    @login_required
    def create_leave_request():
        data = request.get_json(silent=True) or {}
        leave = container.leave_service.create_leave_request(
            user_id=current_user_id(),
            start_date=parse_date_arg(data.get("start_date"), "start_date"),
            end_date=parse_date_arg(data.get("end_date"), "end_date"),
            leave_type=data.get("leave_type") or "",
            reason=data.get("reason"),
            session=data.get("session") or "Full Day",
        )
        return ok(leave.to_dict(), 201, message="Leave request submitted")

    @app.route("/api/leave/requests/history", methods=["GET"], endpoint="leave_history")
    @login_required
    def leave_history():
        history = container.leave_service.get_leave_history(current_user_id())
        return ok([r.to_dict() for r in history])

    @app.route("/api/leave/requests/<int:request_id>/decision", methods=["POST"], endpoint="decide_leave_request")
    @admin_required
    def decide_leave_request(request_id: int):
        data = request.get_json(silent=True) or {}
        try:
            status = RequestStatus(str(data.get("status") or "").strip().lower())
        except ValueError:
            raise ValidationError("Status must be approved or rejected")

        decided = container.leave_service.decide_leave_request(
            current_role=current_role(),
            request_id=request_id,
            status=status,
            reviewed_by=current_user_id(),
            admin_notes=data.get("admin_notes"),
        )
        return ok(decided.to_dict())
