class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, payslip or leave request is absent."""


class LockedPayslipError(DomainError):
    """Raised when a locked payslip is written without the admin override."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class UpstreamUnavailableError(DomainError):
    """Raised when the database cannot be reached."""
