"""
Employee profile model.

Each record belongs to exactly one user and ownership never
moves. Experience is not a column: it is derived from
date_of_joining every time a record is read, because the
answer changes as the calendar advances.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Integer, Numeric, LargeBinary,
    ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from employee_records.models.base import Base, utcnow


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=False)
    salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    # Avatar blob, all four columns set together or all empty
    avatar_data: Mapped[bytes | None] = mapped_column(
        LargeBinary, nullable=True, default=None
    )
    avatar_content_type: Mapped[str | None] = mapped_column(
        String(100), nullable=True, default=None
    )
    avatar_filename: Mapped[str | None] = mapped_column(
        String(255), nullable=True, default=None
    )
    avatar_size: Mapped[int | None] = mapped_column(
        Integer, nullable=True, default=None
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    owner: Mapped["User"] = relationship(back_populates="employees")

    @property
    def has_avatar(self) -> bool:
        return self.avatar_data is not None

    def __repr__(self) -> str:
        return f"<Employee {self.name} (owner {self.owner_id})>"
