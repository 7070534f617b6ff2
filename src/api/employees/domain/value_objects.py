"""Value objects for the employee lifecycle domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers, partial updates and list queries.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from ulid import ULID

if TYPE_CHECKING:
    from employees.domain.aggregates import Employee

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class EmployeeId:
    """Identifier for an Employee aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> EmployeeId:
        """Generate a new EmployeeId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> EmployeeId:
        """Create EmployeeId from string value.

        Accepts case-insensitive input (Crockford's Base32) and
        keeps the canonical uppercase form.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            parsed = ULID.from_str(value.upper())
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid EmployeeId: {value}") from e

        return cls(value=str(parsed))


class ChangedField(StrEnum):
    """Names reported in the changed-field list of an update event."""

    EMAILS = "emails"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"


def normalize_emails(emails: Iterable[str]) -> tuple[str, ...]:
    """Normalize a supplied email collection into an ordered set.

    Strips surrounding whitespace, drops blank entries and removes duplicates
    while keeping the first occurrence's position. Case is preserved.
    """
    stripped = (email.strip() for email in emails)
    return tuple(dict.fromkeys(email for email in stripped if email))


@dataclass(frozen=True)
class EmployeeUpdate:
    """Partial update for an employee.

    Empty values mean "leave unchanged". A non-empty email set replaces the
    employee's existing set wholesale.
    """

    emails: tuple[str, ...] = ()
    first_name: str = ""
    last_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "emails", normalize_emails(self.emails))
        object.__setattr__(self, "first_name", self.first_name.strip())
        object.__setattr__(self, "last_name", self.last_name.strip())


@dataclass(frozen=True)
class ListFilter:
    """Pagination and creation-date filter for listing employees.

    Bounds on created_at are inclusive. ``page`` is 1-based.
    """

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    created_after: datetime | None = None
    created_before: datetime | None = None

    def clamped(self) -> ListFilter:
        """Return a copy with defaults applied and page size capped.

        Never rejects: page <= 0 becomes 1, page_size <= 0 becomes 20 and
        page_size above 100 becomes 100.
        """
        page = self.page if self.page > 0 else DEFAULT_PAGE
        page_size = self.page_size if self.page_size > 0 else DEFAULT_PAGE_SIZE
        page_size = min(page_size, MAX_PAGE_SIZE)
        return ListFilter(
            page=page,
            page_size=page_size,
            created_after=self.created_after,
            created_before=self.created_before,
        )

    @property
    def has_inverted_range(self) -> bool:
        """True when both bounds are set and the lower one is strictly later."""
        return (
            self.created_after is not None
            and self.created_before is not None
            and self.created_after > self.created_before
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class EmployeePage:
    """One page of employees plus the effective pagination used to fetch it."""

    employees: list[Employee] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
