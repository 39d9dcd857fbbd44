"""
Dashboard endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from employee_records.models.base import get_db
from employee_records.models.user import User
from employee_records.schemas.dashboard import SalaryDashboardResponse
from employee_records.security import get_current_user
from employee_records.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/salary", response_model=SalaryDashboardResponse)
def salary_dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Average and maximum salary plus a headcount per tenure
    bucket (0-2y, 2-5y, 5-10y, 10+y). HR only.
    """
    return DashboardService(db).salary_summary(user)
