from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Employee


class UserRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_join_date(self, user_id: int) -> Optional[date]:
        """Profile join date, else the employee record's joining date if strictly YYYY-MM-DD."""

        raise NotImplementedError
