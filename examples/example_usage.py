"""Example: drive the service layer directly, without Flask.

Controllers are thin; the payroll run below is exactly what POST /api/payslips/generate does.
"""

import importlib
import logging
from datetime import date

from dotenv import load_dotenv

from config import get_settings_module

from attendance_payroll.container import build_container
from attendance_payroll.core.logging import setup_logging

logger = logging.getLogger("example_usage")


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(settings.LOG_LEVEL)
    container = build_container(db_config=settings.DB_CONFIG)

    today = date.today()
    report = container.payslip_service.generate_from_attendance(today.month, today.year, generated_by=1)
    for p in report.payslips:
        logger.info("payslip", extra={"payslip_id": p.payslip_id, "net_pay": str(p.net_pay)})
    for f in report.failures:
        logger.warning("skipped", extra={"user_id": f.user_id, "reason": f.reason})


if __name__ == "__main__":
    main()
