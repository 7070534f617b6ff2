"""Employee aggregate for the employee lifecycle context."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from employees.domain.value_objects import (
    ChangedField,
    EmployeeId,
    EmployeeUpdate,
    normalize_emails,
)


@dataclass
class Employee:
    """Employee aggregate root.

    An employee belongs to exactly one tenant and owns one or more email
    addresses. Within a tenant an address is owned by at most one employee;
    that rule is enforced by storage, the aggregate only keeps its own set
    normalized.

    The id is assigned by the repository on first persist when unset.
    Timestamps are populated from storage.
    """

    tenant_id: str
    emails: tuple[str, ...]
    first_name: str
    last_name: str
    id: EmployeeId | None = None
    created_at: datetime | None = field(default=None, compare=False)
    updated_at: datetime | None = field(default=None, compare=False)

    @classmethod
    def create(
        cls,
        tenant_id: str,
        emails: Iterable[str],
        first_name: str,
        last_name: str,
    ) -> Employee:
        """Factory for a new, not yet persisted employee.

        The tenant always comes from the resolved scope of the caller,
        never from request input.
        """
        return cls(
            tenant_id=tenant_id,
            emails=normalize_emails(emails),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
        )

    @property
    def primary_email(self) -> str | None:
        """First owned address, used where a single address is required."""
        return self.emails[0] if self.emails else None

    @property
    def secondary_emails(self) -> tuple[str, ...]:
        return self.emails[1:]

    def owns_email(self, email: str) -> bool:
        return email in self.emails

    def new_emails(self, emails: Iterable[str]) -> list[str]:
        """Return the addresses in ``emails`` this employee does not already own."""
        return [email for email in emails if not self.owns_email(email)]

    def changed_fields(self, update: EmployeeUpdate) -> list[str]:
        """List the fields an update would actually change.

        Only supplied (non-empty) values are compared. Email sets are
        compared without regard to order.
        """
        changed: list[str] = []
        if update.emails and set(update.emails) != set(self.emails):
            changed.append(ChangedField.EMAILS.value)
        if update.first_name and update.first_name != self.first_name:
            changed.append(ChangedField.FIRST_NAME.value)
        if update.last_name and update.last_name != self.last_name:
            changed.append(ChangedField.LAST_NAME.value)
        return changed
