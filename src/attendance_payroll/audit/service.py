from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import AuditAction
from .model import AuditEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditTrail:
    """Best-effort audit sink: a failed write is logged and never undoes the caller's work."""

    def __init__(self, audit: AuditRepository):
        self._audit = audit

    def record(
        self,
        action: AuditAction,
        *,
        entity_type: str,
        entity_id: Optional[object],
        performed_by: Optional[int],
        user_id: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> bool:
        entry = AuditEntry(
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            performed_by=performed_by,
            user_id=user_id,
            details=details or {},
        )
        try:
            self._audit.add(entry)
        except Exception:
            logger.warning(
                "Audit write failed action=%s entity=%s:%s",
                action.value,
                entity_type,
                entry.entity_id,
                exc_info=True,
            )
            return False
        return True
