from __future__ import annotations

import json

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import AuditEntry
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, entry: AuditEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_audit_log(user_id, action, entity_type, entity_id, performed_by, details)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.user_id,
                    entry.action.value,
                    entry.entity_type,
                    entry.entity_id,
                    entry.performed_by,
                    json.dumps(entry.details, default=str),
                ),
            )
