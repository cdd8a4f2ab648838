class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class EmployeeNotFoundError(NotFoundError):
    """Raised when payroll is requested for an unknown employee."""

    def __init__(self, employee_id: int):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class ConflictError(DomainError):
    """Raised when an operation clashes with the current state of a record."""
