"""
Employee record endpoints.

The routers only translate HTTP into service calls: form and
query parsing, reading the avatar upload, choosing the status
code. Access rules, validation, experience and auditing all
live in EmployeeService.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile
from sqlalchemy.orm import Session

from employee_records.api.dependencies import get_audit_recorder
from employee_records.config import get_settings
from employee_records.models.base import get_db
from employee_records.models.user import User
from employee_records.schemas.employee import (
    DeleteResponse,
    EmployeeFilters,
    EmployeeResponse,
)
from employee_records.security import get_current_user
from employee_records.services.audit_service import AuditRecorder
from employee_records.services.employee_service import AvatarUpload, EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])


def read_avatar(upload: UploadFile | None) -> AvatarUpload | None:
    """
    Read at most one byte past the size limit, so an oversized
    file is rejected without buffering all of it.
    """
    if upload is None or not upload.filename:
        return None
    limit = get_settings().AVATAR_MAX_BYTES
    data = upload.file.read(limit + 1)
    return AvatarUpload(
        data=data,
        content_type=upload.content_type or "application/octet-stream",
        filename=upload.filename,
    )


@router.post("", response_model=EmployeeResponse, status_code=201)
def create_employee(
    name: str | None = Form(None),
    date_of_joining: str | None = Form(None, alias="dateOfJoining"),
    salary: str | None = Form(None),
    owner_id: str | None = Form(None, alias="ownerId"),
    avatar: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Create an employee record.

    HR may set ownerId to file the record for another user;
    Employee callers always own what they create.
    """
    service = EmployeeService(db, audit)
    return service.create_employee(
        user,
        {
            "name": name,
            "date_of_joining": date_of_joining,
            "salary": salary,
            "owner_id": owner_id,
        },
        read_avatar(avatar),
    )


@router.get("", response_model=list[EmployeeResponse])
def list_employees(
    name: str | None = Query(None),
    min_salary: Decimal | None = Query(None, alias="minSalary", ge=0),
    max_salary: Decimal | None = Query(None, alias="maxSalary", ge=0),
    min_exp_months: int | None = Query(None, alias="minExpMonths", ge=0),
    max_exp_months: int | None = Query(None, alias="maxExpMonths", ge=0),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    List employee records, newest first.

    Employee callers only ever see their own records,
    whatever filters are given.
    """
    filters = EmployeeFilters(
        name=name,
        min_salary=min_salary,
        max_salary=max_salary,
        min_experience_months=min_exp_months,
        max_experience_months=max_exp_months,
    )
    return EmployeeService(db, audit).list_employees(user, filters)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Get one record."""
    return EmployeeService(db, audit).get_employee(user, employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    name: str | None = Form(None),
    date_of_joining: str | None = Form(None, alias="dateOfJoining"),
    salary: str | None = Form(None),
    avatar: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Update the fields that were sent; blank fields are left alone."""
    service = EmployeeService(db, audit)
    return service.update_employee(
        user,
        employee_id,
        {
            "name": name,
            "date_of_joining": date_of_joining,
            "salary": salary,
        },
        read_avatar(avatar),
    )


@router.delete("/{employee_id}", response_model=DeleteResponse)
def delete_employee(
    employee_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Delete a record. HR only."""
    return EmployeeService(db, audit).delete_employee(user, employee_id)


@router.get("/{employee_id}/avatar")
def get_employee_avatar(
    employee_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Raw avatar bytes with their stored content type."""
    avatar = EmployeeService(db, audit).get_avatar(user, employee_id)
    return Response(content=avatar.data, media_type=avatar.content_type)
