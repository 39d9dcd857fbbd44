"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An invalid role or audit
action is caught at the database level, not just in Python
validation.
"""

import enum


class Role(str, enum.Enum):
    """Access level of a user."""
    HR = "HR"
    EMPLOYEE = "Employee"


class AuditAction(str, enum.Enum):
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditTargetType(str, enum.Enum):
    """Kind of record an audit entry points at."""
    EMPLOYEE = "Employee"
    USER = "User"
