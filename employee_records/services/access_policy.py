"""
Access policy — who may do what to which employee record.

Decisions come from a single capability table keyed by
(role, operation, ownership). Anything not listed is denied.
HR administers every record; an Employee only ever reaches
records they own and can never delete, not even their own.
"""

import enum

from employee_records.errors import AuthorizationError
from employee_records.models.employee import Employee
from employee_records.models.enums import Role
from employee_records.models.user import User


class Operation(str, enum.Enum):
    CREATE = "CREATE"
    READ = "READ"
    LIST = "LIST"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    READ_AVATAR = "READ_AVATAR"
    VIEW_SALARY_DASHBOARD = "VIEW_SALARY_DASHBOARD"


class Ownership(str, enum.Enum):
    """How the caller relates to the target record."""
    OWN = "OWN"
    OTHER = "OTHER"
    # Operation is not about one existing record (create, list, dashboard)
    NONE = "NONE"


# Operations that target a single stored record
RECORD_OPERATIONS = frozenset({
    Operation.READ,
    Operation.UPDATE,
    Operation.DELETE,
    Operation.READ_AVATAR,
})


POLICY: dict[tuple[Role, Operation, Ownership], bool] = {
    # HR
    (Role.HR, Operation.CREATE, Ownership.NONE): True,
    (Role.HR, Operation.LIST, Ownership.NONE): True,
    (Role.HR, Operation.READ, Ownership.OWN): True,
    (Role.HR, Operation.READ, Ownership.OTHER): True,
    (Role.HR, Operation.UPDATE, Ownership.OWN): True,
    (Role.HR, Operation.UPDATE, Ownership.OTHER): True,
    (Role.HR, Operation.DELETE, Ownership.OWN): True,
    (Role.HR, Operation.DELETE, Ownership.OTHER): True,
    (Role.HR, Operation.READ_AVATAR, Ownership.OWN): True,
    (Role.HR, Operation.READ_AVATAR, Ownership.OTHER): True,
    (Role.HR, Operation.VIEW_SALARY_DASHBOARD, Ownership.NONE): True,
    # Employee
    (Role.EMPLOYEE, Operation.CREATE, Ownership.NONE): True,
    (Role.EMPLOYEE, Operation.LIST, Ownership.NONE): True,
    (Role.EMPLOYEE, Operation.READ, Ownership.OWN): True,
    (Role.EMPLOYEE, Operation.UPDATE, Ownership.OWN): True,
    (Role.EMPLOYEE, Operation.READ_AVATAR, Ownership.OWN): True,
}


def is_allowed(role: Role, operation: Operation, ownership: Ownership) -> bool:
    return POLICY.get((role, operation, ownership), False)


def ownership_of(user: User, employee: Employee | None) -> Ownership:
    if employee is None:
        return Ownership.NONE
    if employee.owner_id == user.id:
        return Ownership.OWN
    return Ownership.OTHER


def precheck(user: User, operation: Operation) -> None:
    """
    Reject before any storage access when the role is denied
    regardless of which record is targeted.

    For record operations this means "denied for both OWN and
    OTHER"; for the rest the full decision is already known.
    """
    if operation in RECORD_OPERATIONS:
        candidates = (Ownership.OWN, Ownership.OTHER)
    else:
        candidates = (Ownership.NONE,)
    if not any(is_allowed(user.role, operation, o) for o in candidates):
        raise AuthorizationError("Forbidden")


def authorize(
    user: User, operation: Operation, employee: Employee | None = None
) -> None:
    """Raise AuthorizationError unless the table allows the request."""
    if not is_allowed(user.role, operation, ownership_of(user, employee)):
        raise AuthorizationError("Forbidden")


def resolve_owner_id(user: User, requested_owner_id: int | None) -> int:
    """
    Owner of a record being created.

    HR may file a record for anyone (defaulting to themselves);
    an Employee always owns what they create.
    """
    if user.role == Role.HR and requested_owner_id is not None:
        return requested_owner_id
    return user.id


def list_scope(user: User) -> int | None:
    """Owner id every list query must be restricted to, or None for unscoped."""
    if user.role == Role.HR:
        return None
    return user.id
