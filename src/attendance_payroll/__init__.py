"""Attendance-to-payroll package.

Organized by feature modules (attendance, leave, payroll, ...) with a thin
Flask controller layer over service/repository layers. The services are
usable without Flask through :func:`attendance_payroll.container.build_container`.
"""
