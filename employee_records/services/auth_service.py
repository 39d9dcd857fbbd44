"""
Auth service — signup and login.

Passwords are stored only as bcrypt hashes. Both operations
return a bearer token carrying the user id.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from employee_records.errors import AuthenticationError, ConflictError
from employee_records.models.enums import AuditAction, AuditTargetType
from employee_records.models.user import User
from employee_records.schemas.auth import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
)
from employee_records.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from employee_records.services.audit_service import AuditRecorder

logger = logging.getLogger("employee_records.auth")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:

    def __init__(self, db: Session, audit: AuditRecorder):
        self.db = db
        self.audit = audit

    def _get_by_email(self, email: str) -> User | None:
        return self.db.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()

    def _issue(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=create_access_token(user.id),
            user=UserResponse.model_validate(user),
        )

    def signup(self, request: SignupRequest) -> AuthResponse:
        """
        Register a user and sign them in.

        Raises ConflictError if the email is already registered,
        including when a concurrent signup wins the race to the
        unique constraint.
        """
        email = normalize_email(request.email)
        if self._get_by_email(email):
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            password_hash=hash_password(request.password),
            role=request.role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered")

        logger.info("user_signed_up", extra={"user_id": user.id, "role": user.role.value})
        self.audit.record(
            user.id, AuditAction.CREATE, AuditTargetType.USER, user.id,
            {"role": user.role.value},
        )
        return self._issue(user)

    def login(self, request: LoginRequest) -> AuthResponse:
        """Unknown email and wrong password fail identically."""
        user = self._get_by_email(normalize_email(request.email))
        if user is None or not verify_password(request.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return self._issue(user)
