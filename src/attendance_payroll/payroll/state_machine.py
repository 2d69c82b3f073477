from __future__ import annotations

from ..core.enums import PayslipStatus
from ..core.exceptions import LockedPayslipError, ValidationError


class PayslipStateMachine:
    """One-way payslip lifecycle.

    - draft -> released | locked
    - pending -> released | locked
    - released -> locked
    - locked is terminal
    """

    VALID_TRANSITIONS: dict[PayslipStatus, list[PayslipStatus]] = {
        PayslipStatus.DRAFT: [PayslipStatus.RELEASED, PayslipStatus.LOCKED],
        PayslipStatus.PENDING: [PayslipStatus.RELEASED, PayslipStatus.LOCKED],
        PayslipStatus.RELEASED: [PayslipStatus.LOCKED],
        PayslipStatus.LOCKED: [],
    }

    # Statuses a plain upsert may write; release and lock go through their own operations.
    EDITABLE_STATUSES: tuple[PayslipStatus, ...] = (PayslipStatus.DRAFT, PayslipStatus.PENDING)

    @classmethod
    def can_transition(cls, from_status: PayslipStatus, to_status: PayslipStatus) -> bool:
        return to_status in cls.VALID_TRANSITIONS.get(from_status, [])

    @classmethod
    def validate_transition(cls, from_status: PayslipStatus, to_status: PayslipStatus) -> None:
        if from_status == PayslipStatus.LOCKED:
            raise LockedPayslipError("Payslip is locked")
        if not cls.can_transition(from_status, to_status):
            raise ValidationError(f"Invalid transition from '{from_status.value}' to '{to_status.value}'")

    @classmethod
    def validate_editable(cls, status: PayslipStatus) -> None:
        if status not in cls.EDITABLE_STATUSES:
            raise ValidationError(
                f"Payslip status '{status.value}' cannot be set directly; use release or lock"
            )
