from __future__ import annotations

from typing import Protocol

from .model import AuditEntry


class AuditRepository(Protocol):
    def add(self, entry: AuditEntry) -> None:
        raise NotImplementedError
