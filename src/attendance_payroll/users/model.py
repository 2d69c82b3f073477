from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by the payroll pipeline.

    Note: Plain data object, read from the identity subsystem; this package never writes it.
    """

    user_id: int
    email: str
    full_name: Optional[str]
    role: Role = Role.STAFF
    timezone: Optional[str] = None
    employee_code: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
