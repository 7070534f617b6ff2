"""Storage and transport exceptions raised by employee adapters.

These represent failures of collaborators rather than business rule
violations. The application layer translates the ones it understands and
lets the rest propagate.
"""


class StorageError(Exception):
    """Raised when a persistence operation fails.

    The underlying driver error is chained as ``__cause__``. Multi-row
    operations have been rolled back when this is raised.
    """

    pass


class DuplicateEmailError(StorageError):
    """Raised when the (tenant_id, email) unique constraint rejects a write.

    This is the authoritative uniqueness signal; the application layer
    reports it as an already-existing employee.
    """

    def __init__(self, message: str, tenant_id: str | None = None) -> None:
        super().__init__(message)
        self.tenant_id = tenant_id


class EventPublishError(Exception):
    """Raised when a lifecycle event could not be handed to the transport.

    Never fatal to the operation that triggered the event.
    """

    pass
