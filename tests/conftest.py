"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test and
dropped after it, so no test data persists.
"""

import os

# Must be set before the settings object is first built
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import date

import pytest
from fastapi.testclient import TestClient

from employee_records.main import app
from employee_records.models import Base, Database, Role, User
from employee_records.models.base import get_db
from employee_records.security import create_access_token, hash_password
from employee_records.services.audit_service import AuditRecorder


# SQLite for tests: no external database needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

test_database = Database(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = test_database.session_factory


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=test_database.engine)
    yield
    Base.metadata.drop_all(bind=test_database.engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def audit_recorder():
    """Recorder that writes inline through its own test session."""
    return AuditRecorder(TestSessionLocal)


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    get_db is overridden so endpoints share the test session.
    The audit recorder is the real one: it reads the storage
    client from app.state and runs as a background task.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.state.database = test_database
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.database = None


# --- Users ---

def make_user(db_session, email, role):
    user = User(email=email, password_hash=hash_password("secret"), role=role)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def hr_user(db_session):
    return make_user(db_session, "hr@test.com", Role.HR)


@pytest.fixture
def employee_user(db_session):
    return make_user(db_session, "alice@test.com", Role.EMPLOYEE)


@pytest.fixture
def other_employee_user(db_session):
    return make_user(db_session, "bob@test.com", Role.EMPLOYEE)


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _headers


@pytest.fixture
def months_ago():
    """Same day-of-month k calendar months before today (day capped at 28)."""
    def _months_ago(months, today=None):
        today = today or date.today()
        index = today.year * 12 + (today.month - 1) - months
        year, month = divmod(index, 12)
        return date(year, month + 1, min(today.day, 28))
    return _months_ago
