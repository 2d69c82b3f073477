from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AuditAction


@dataclass(frozen=True)
class AuditEntry:
    action: AuditAction
    entity_type: str
    entity_id: Optional[str]
    performed_by: Optional[int]
    user_id: Optional[int] = None
    details: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None
