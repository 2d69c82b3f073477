from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, ok, parse_date_arg, parse_int_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_range")
    @admin_required
    def attendance_range():
        start = parse_date_arg(request.args.get("start"), "start")
        end = parse_date_arg(request.args.get("end"), "end")
        days = container.attendance_service.classify_range(start, end)
        return ok([d.to_dict() for d in days])

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="attendance_monthly")
    @admin_required
    def attendance_monthly():
        month = parse_int_arg(request.args.get("month"), "month")
        year = parse_int_arg(request.args.get("year"), "year")
        days = container.attendance_service.get_monthly_report(month, year)
        return ok([d.to_dict() for d in days])
