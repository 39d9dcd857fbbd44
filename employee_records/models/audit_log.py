"""
Audit log model.

Records who did what to which record, and when. Every read
and mutation of an employee record leaves an entry here.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, ForeignKey, JSON, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from employee_records.models.base import Base, utcnow
from employee_records.models.enums import AuditAction, AuditTargetType


class AuditLog(Base):
    """
    Immutable record of an access or change.

    Audit logs are append-only. The application never updates
    or deletes an audit record.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    action: Mapped[AuditAction] = mapped_column(
        SAEnum(AuditAction, name="audit_action_enum", create_constraint=True),
        nullable=False,
    )
    target_type: Mapped[AuditTargetType] = mapped_column(
        SAEnum(
            AuditTargetType,
            name="audit_target_type_enum",
            create_constraint=True,
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
    )
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    meta: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<AuditLog {self.action.value} "
            f"{self.target_type.value}:{self.target_id} by {self.user_id}>"
        )
