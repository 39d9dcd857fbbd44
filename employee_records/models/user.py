"""
User model.

An identity that can sign in. HR users administer every
employee record; Employee users own zero or more records
and only ever see those.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from employee_records.models.base import Base, utcnow
from employee_records.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # Fixed at signup
    role: Mapped[Role] = mapped_column(
        SAEnum(
            Role,
            name="role_enum",
            create_constraint=True,
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    employees: Mapped[list["Employee"]] = relationship(back_populates="owner")

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"
