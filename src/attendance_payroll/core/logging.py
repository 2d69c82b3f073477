from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    # create_app may run more than once in a process (tests).
    if not any(isinstance(h.formatter, CustomJsonFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(CustomJsonFormatter("%(timestamp) %(level) %(name) %(message)"))
        root.addHandler(handler)
    root.setLevel(level.upper())

    logging.getLogger("mysql.connector").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
