"""Business exceptions for the employee lifecycle.

Every exception carries a stable ``reason`` code so presentation layers can
map it to a transport status without inspecting messages.
"""


class EmployeeError(Exception):
    """Base class for employee business errors."""

    reason = "EMPLOYEE_ERROR"
    default_message = "employee operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidInputError(EmployeeError):
    """Raised when a request violates a business rule before any storage access."""

    reason = "INVALID_INPUT"
    default_message = "invalid input"


class InvalidEmailError(InvalidInputError):
    """Raised when an employee would be created without any email address."""

    reason = "INVALID_EMAIL"
    default_message = "at least one email address is required"


class InvalidDateRangeError(InvalidInputError):
    """Raised when created_after is later than created_before."""

    reason = "INVALID_DATE_RANGE"
    default_message = "created_after must be before created_before"


class InvalidMergeError(InvalidInputError):
    """Raised when the primary and secondary merge emails are identical."""

    reason = "INVALID_MERGE"
    default_message = "primary and secondary emails must be different"


class EmployeeAlreadyExistsError(EmployeeError):
    """Raised when an email address is already owned within the tenant.

    Covers both the advisory pre-check and the storage-level unique
    constraint, which is authoritative.
    """

    reason = "EMPLOYEE_ALREADY_EXISTS"
    default_message = "employee already exists"


class EmployeeNotFoundError(EmployeeError):
    """Raised when an employee id or email does not resolve within the tenant."""

    reason = "EMPLOYEE_NOT_FOUND"
    default_message = "employee not found"


class PrimaryNotFoundError(EmployeeNotFoundError):
    """Raised when the primary email of a merge does not resolve."""

    reason = "PRIMARY_NOT_FOUND"
    default_message = "primary employee not found"


class SecondaryNotFoundError(EmployeeNotFoundError):
    """Raised when the secondary email of a merge does not resolve."""

    reason = "SECONDARY_NOT_FOUND"
    default_message = "secondary employee not found"


class CannotMergeSameError(EmployeeNotFoundError):
    """Raised when both merge emails belong to the same employee."""

    reason = "CANNOT_MERGE_SAME"
    default_message = "cannot merge employee with itself"
