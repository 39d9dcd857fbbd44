"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from employee_records.models.base import Base, Database
from employee_records.models.enums import (
    Role,
    AuditAction,
    AuditTargetType,
)
from employee_records.models.user import User
from employee_records.models.employee import Employee
from employee_records.models.audit_log import AuditLog

__all__ = [
    "Base",
    "Database",
    "Role",
    "AuditAction",
    "AuditTargetType",
    "User",
    "Employee",
    "AuditLog",
]
