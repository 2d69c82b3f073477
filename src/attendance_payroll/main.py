from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_ATTENDANCE_TIMEZONE, DEFAULT_CLOCK_STORAGE_TIMEZONE
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .attendance.controller import register as register_attendance
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "Starting with settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            attendance_timezone=getattr(settings, "ATTENDANCE_TIMEZONE", DEFAULT_ATTENDANCE_TIMEZONE),
            clock_storage_timezone=getattr(settings, "CLOCK_STORAGE_TIMEZONE", DEFAULT_CLOCK_STORAGE_TIMEZONE),
        )

    app.extensions["attendance_payroll"] = container
    register_error_handlers(app)
    register_attendance(app, container)
    register_leave(app, container)
    register_payroll(app, container)

    return app
