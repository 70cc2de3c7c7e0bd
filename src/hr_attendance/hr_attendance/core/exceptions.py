class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmployeeNotFoundError(DomainError):
    """Raised when an employee id does not resolve."""


class OutOfWindowError(DomainError):
    """Raised when punch-in is attempted outside the allowed hours."""


class AlreadyPunchedInError(DomainError):
    """Raised when an attendance entry already exists for the day."""


class NoOpenPunchInError(DomainError):
    """Raised when punch-out has no open punch-in to close."""


class MissingBaseSalaryError(DomainError):
    """Payroll skip condition: base salary absent or not positive."""


class PersistenceError(Exception):
    """Raised when the underlying store fails a read or write."""
