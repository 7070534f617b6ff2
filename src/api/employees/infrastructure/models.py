"""SQLAlchemy ORM models for the employee lifecycle context.

Employees and their email addresses live in two tables. The email table
carries a denormalized tenant_id so that (tenant_id, email) uniqueness is
enforced by a single unique constraint.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ulid import ULID

from infrastructure.database.models import Base, CreatedAtMixin, TimestampMixin

EMAIL_UNIQUE_CONSTRAINT = "uq_employee_emails_tenant_email"


def _generate_id() -> str:
    return str(ULID())


class EmployeeModel(Base, TimestampMixin):
    """ORM model for the employees table."""

    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    emails: Mapped[list[EmployeeEmailModel]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [EmployeeEmailModel.created_at, EmployeeEmailModel.id],
        lazy="raise",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<EmployeeModel(id={self.id}, tenant_id={self.tenant_id})>"


class EmployeeEmailModel(Base, CreatedAtMixin):
    """ORM model for the employee_emails table.

    Foreign Key Constraint:
    - employee_id references employees.id with CASCADE delete, so deleting
      an employee removes its addresses in the same statement
    """

    __tablename__ = "employee_emails"
    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name=EMAIL_UNIQUE_CONSTRAINT),
        Index("ix_employee_emails_employee_id", "employee_id"),
    )

    id: Mapped[str] = mapped_column(
        String(26), primary_key=True, insert_default=_generate_id
    )
    employee_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    tenant_id: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    employee: Mapped[EmployeeModel] = relationship(back_populates="emails")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<EmployeeEmailModel(id={self.id}, employee_id={self.employee_id}, "
            f"email={self.email})>"
        )
