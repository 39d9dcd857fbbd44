"""
Signup and login endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from employee_records.api.dependencies import get_audit_recorder
from employee_records.models.base import get_db
from employee_records.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from employee_records.services.audit_service import AuditRecorder
from employee_records.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
def signup(
    request: SignupRequest,
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Register with email, password and role (HR or Employee)."""
    return AuthService(db, audit).signup(request)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Exchange credentials for a bearer token."""
    return AuthService(db, audit).login(request)
