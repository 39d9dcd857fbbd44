"""
Tests for signup and login.
"""

import pytest
from sqlalchemy import select

from employee_records.errors import AuthenticationError, ConflictError
from employee_records.models.audit_log import AuditLog
from employee_records.models.enums import AuditAction, AuditTargetType, Role
from employee_records.models.user import User
from employee_records.schemas.auth import LoginRequest, SignupRequest
from employee_records.security import decode_access_token
from employee_records.services.auth_service import AuthService


@pytest.fixture
def service(db_session, audit_recorder):
    return AuthService(db_session, audit_recorder)


def signup(service, email="new@test.com", password="pw123", role=Role.EMPLOYEE):
    return service.signup(SignupRequest(email=email, password=password, role=role))


class TestSignup:

    def test_signup_returns_token_for_new_user(self, service):
        result = signup(service)

        assert result.user.email == "new@test.com"
        assert result.user.role == Role.EMPLOYEE
        assert decode_access_token(result.token) == result.user.id

    def test_password_is_stored_hashed(self, service, db_session):
        signup(service)
        user = db_session.execute(select(User)).scalar_one()
        assert user.password_hash != "pw123"
        assert user.password_hash.startswith("$2")

    def test_email_is_normalized(self, service):
        result = signup(service, email="  New@Test.COM ")
        assert result.user.email == "new@test.com"

    def test_duplicate_email_rejected(self, service, db_session):
        """Emails compare case-insensitively, and no second row is written."""
        signup(service)

        with pytest.raises(ConflictError, match="already registered"):
            signup(service, email="NEW@test.com", role=Role.HR)
        assert len(db_session.execute(select(User)).scalars().all()) == 1

    def test_signup_is_audited(self, service, db_session):
        result = signup(service, role=Role.HR)

        entry = db_session.execute(select(AuditLog)).scalar_one()
        assert entry.user_id == result.user.id
        assert entry.action == AuditAction.CREATE
        assert entry.target_type == AuditTargetType.USER
        assert entry.meta == {"role": "HR"}


class TestLogin:

    def test_login_succeeds(self, service, employee_user):
        result = service.login(LoginRequest(email="alice@test.com", password="secret"))

        assert result.user.id == employee_user.id
        assert decode_access_token(result.token) == employee_user.id

    def test_login_ignores_email_case(self, service, employee_user):
        result = service.login(LoginRequest(email="Alice@Test.com", password="secret"))
        assert result.user.id == employee_user.id

    def test_wrong_password(self, service, employee_user):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            service.login(LoginRequest(email="alice@test.com", password="nope"))

    def test_unknown_email(self, service):
        """Same error as a wrong password, so registered emails cannot be enumerated."""
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            service.login(LoginRequest(email="ghost@test.com", password="secret"))
