"""
Employee record service — the orchestration layer.

Every operation runs the same steps:
1. Authorize against the access policy (before storage when
   the role alone decides)
2. Validate input (create: all fields; update: sent fields)
3. Read or write storage and commit
4. Annotate results with experience derived from the join date
5. Record an audit entry (best-effort, never fails the call)

Validation and authorization errors are raised before any
write, so a rejected request leaves nothing behind.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Mapping

import pydantic
from sqlalchemy.orm import Session

from employee_records.config import get_settings
from employee_records.errors import NotFoundError, ValidationError
from employee_records.models.employee import Employee
from employee_records.models.enums import AuditAction, AuditTargetType, Role
from employee_records.models.user import User
from employee_records.schemas.employee import (
    AvatarInfo,
    DeleteResponse,
    EmployeeCreate,
    EmployeeFilters,
    EmployeeResponse,
    EmployeeUpdate,
)
from employee_records.services import access_policy
from employee_records.services.access_policy import Operation
from employee_records.services.audit_service import AuditRecorder, list_target_id
from employee_records.services.query_builder import build_employee_query
from employee_records.services.tenure import experience_from_date


@dataclass
class AvatarUpload:
    data: bytes
    content_type: str
    filename: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class Avatar:
    data: bytes
    content_type: str
    filename: str | None


def to_response(employee: Employee, today: date | None = None) -> EmployeeResponse:
    """Project a stored record to its API shape, adding derived experience."""
    tenure = experience_from_date(employee.date_of_joining, today)
    avatar = None
    if employee.has_avatar:
        avatar = AvatarInfo(
            filename=employee.avatar_filename,
            content_type=employee.avatar_content_type,
            size=employee.avatar_size,
        )
    return EmployeeResponse(
        id=employee.id,
        owner_id=employee.owner_id,
        name=employee.name,
        date_of_joining=employee.date_of_joining,
        salary=float(employee.salary),
        avatar=avatar,
        experience_months=tenure.months,
        experience_years=tenure.years,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def _provided(data: Mapping[str, Any]) -> dict[str, Any]:
    # Form posts send blanks for untouched fields
    return {
        key: value for key, value in data.items()
        if value is not None and value != ""
    }


def _validation_message(exc: pydantic.ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(p) for p in error["loc"]) or "body"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


class EmployeeService:

    def __init__(
        self,
        db: Session,
        audit: AuditRecorder,
        clock: Callable[[], date] = date.today,
    ):
        self.db = db
        self.audit = audit
        self.clock = clock

    # --- helpers ---

    def _get(self, employee_id: int) -> Employee:
        employee = self.db.get(Employee, employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _check_avatar(self, avatar: AvatarUpload | None) -> None:
        if avatar is None:
            return
        limit = get_settings().AVATAR_MAX_BYTES
        if avatar.size > limit:
            raise ValidationError(f"Avatar exceeds {limit} bytes")

    @staticmethod
    def _apply_avatar(employee: Employee, avatar: AvatarUpload) -> None:
        employee.avatar_data = avatar.data
        employee.avatar_content_type = avatar.content_type or "application/octet-stream"
        employee.avatar_filename = avatar.filename
        employee.avatar_size = avatar.size

    # --- operations ---

    def create_employee(
        self,
        actor: User,
        data: Mapping[str, Any],
        avatar: AvatarUpload | None = None,
    ) -> EmployeeResponse:
        """
        Create a record.

        name, date_of_joining and salary are required. An HR
        caller may pass owner_id to file the record for another
        user; for an Employee caller it is ignored.
        """
        access_policy.authorize(actor, Operation.CREATE)

        fields = _provided(data)
        if actor.role != Role.HR:
            # Ignored for Employee callers, so not validated either
            fields.pop("owner_id", None)
        try:
            request = EmployeeCreate.model_validate(fields)
        except pydantic.ValidationError as exc:
            raise ValidationError(_validation_message(exc)) from exc
        self._check_avatar(avatar)

        owner_id = access_policy.resolve_owner_id(actor, request.owner_id)
        if owner_id != actor.id and self.db.get(User, owner_id) is None:
            raise ValidationError(f"Owner {owner_id} not found")

        employee = Employee(
            owner_id=owner_id,
            name=request.name,
            date_of_joining=request.date_of_joining,
            salary=request.salary,
        )
        if avatar is not None:
            self._apply_avatar(employee, avatar)
        self.db.add(employee)
        self._commit()

        response = to_response(employee, self.clock())
        self.audit.record(
            actor.id, AuditAction.CREATE, AuditTargetType.EMPLOYEE, employee.id
        )
        return response

    def list_employees(
        self, actor: User, filters: EmployeeFilters
    ) -> list[EmployeeResponse]:
        """Filtered list, newest first. Employee callers only see their own records."""
        access_policy.authorize(actor, Operation.LIST)
        today = self.clock()

        query = build_employee_query(
            filters, owner_id=access_policy.list_scope(actor), today=today
        )
        employees = list(self.db.execute(query).scalars().all())

        responses = [to_response(e, today) for e in employees]
        self.audit.record(
            actor.id,
            AuditAction.READ,
            AuditTargetType.EMPLOYEE,
            list_target_id(employees, actor.id),
            {"count": len(employees), "filters": filters.applied()},
        )
        return responses

    def get_employee(self, actor: User, employee_id: int) -> EmployeeResponse:
        access_policy.precheck(actor, Operation.READ)
        employee = self._get(employee_id)
        access_policy.authorize(actor, Operation.READ, employee)

        response = to_response(employee, self.clock())
        self.audit.record(
            actor.id, AuditAction.READ, AuditTargetType.EMPLOYEE, employee.id
        )
        return response

    def update_employee(
        self,
        actor: User,
        employee_id: int,
        data: Mapping[str, Any],
        avatar: AvatarUpload | None = None,
    ) -> EmployeeResponse:
        """Apply only the fields that were sent. Ownership never changes."""
        access_policy.precheck(actor, Operation.UPDATE)
        employee = self._get(employee_id)
        access_policy.authorize(actor, Operation.UPDATE, employee)

        try:
            request = EmployeeUpdate.model_validate(_provided(data))
        except pydantic.ValidationError as exc:
            raise ValidationError(_validation_message(exc)) from exc
        self._check_avatar(avatar)

        updates = request.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in updates.items():
            setattr(employee, key, value)
        updated_fields = list(updates)
        if avatar is not None:
            self._apply_avatar(employee, avatar)
            updated_fields.append("avatar")
        self._commit()

        response = to_response(employee, self.clock())
        self.audit.record(
            actor.id,
            AuditAction.UPDATE,
            AuditTargetType.EMPLOYEE,
            employee.id,
            {"updates": updated_fields},
        )
        return response

    def delete_employee(self, actor: User, employee_id: int) -> DeleteResponse:
        """HR only. An Employee caller is refused before the record is looked up."""
        access_policy.precheck(actor, Operation.DELETE)
        employee = self._get(employee_id)
        access_policy.authorize(actor, Operation.DELETE, employee)

        self.db.delete(employee)
        self._commit()

        self.audit.record(
            actor.id, AuditAction.DELETE, AuditTargetType.EMPLOYEE, employee_id
        )
        return DeleteResponse(ok=True)

    def get_avatar(self, actor: User, employee_id: int) -> Avatar:
        access_policy.precheck(actor, Operation.READ_AVATAR)
        employee = self._get(employee_id)
        access_policy.authorize(actor, Operation.READ_AVATAR, employee)

        if not employee.has_avatar:
            raise NotFoundError(f"Employee {employee_id} has no avatar")
        return Avatar(
            data=employee.avatar_data,
            content_type=employee.avatar_content_type or "application/octet-stream",
            filename=employee.avatar_filename,
        )
