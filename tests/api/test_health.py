"""
Tests for the health check endpoint.
"""

from employee_records.main import app
from employee_records.models.base import Database

UNREACHABLE_DATABASE_URL = "sqlite:////nonexistent/dir/records.db"


def test_health_check_returns_200(client):
    """
    Verify the health endpoint responds with HTTP 200.

    This is the most basic test: can the application receive a
    request and respond? If this fails, nothing else will work.
    """
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    """
    Verify the response includes the correct service name.

    This catches accidental changes to the response format
    that could break monitoring systems that parse this field.
    """
    response = client.get("/health")
    assert response.json()["service"] == "employee-records"


def test_health_check_reports_healthy_database(client):
    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"


def test_health_check_degraded_when_database_down(client):
    """The endpoint still answers 200 and reports the outage."""
    app.state.database = Database(UNREACHABLE_DATABASE_URL)

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unhealthy"


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert response.headers["X-Request-Id"] == "abc-123"
