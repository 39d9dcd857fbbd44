"""Business logic services."""

from employee_records.services.audit_service import AuditRecorder
from employee_records.services.auth_service import AuthService
from employee_records.services.dashboard_service import DashboardService
from employee_records.services.employee_service import EmployeeService

__all__ = ["AuditRecorder", "AuthService", "DashboardService", "EmployeeService"]
