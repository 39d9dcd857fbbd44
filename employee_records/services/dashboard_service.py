"""
Salary dashboard — aggregate pay and tenure distribution (HR only).
"""

from datetime import date

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from employee_records.models.employee import Employee
from employee_records.models.user import User
from employee_records.schemas.dashboard import BucketCount, SalaryDashboardResponse
from employee_records.services import access_policy
from employee_records.services.access_policy import Operation
from employee_records.services.tenure import experience_from_date


# (label, min months, max months), inclusive. None means open-ended.
TENURE_BUCKETS: list[tuple[str, int, int | None]] = [
    ("0-2y", 0, 24),
    ("2-5y", 25, 60),
    ("5-10y", 61, 120),
    ("10+y", 121, None),
]


def bucket_for(months: int) -> str:
    for label, low, high in TENURE_BUCKETS:
        if months >= low and (high is None or months <= high):
            return label
    # months is never negative, so the first bucket always catches it
    return TENURE_BUCKETS[0][0]


class DashboardService:

    def __init__(self, db: Session):
        self.db = db

    def salary_summary(
        self, actor: User, today: date | None = None
    ) -> SalaryDashboardResponse:
        access_policy.authorize(actor, Operation.VIEW_SALARY_DASHBOARD)
        today = today or date.today()

        avg_salary, max_salary = self.db.execute(
            select(
                func.coalesce(func.avg(Employee.salary), 0),
                func.coalesce(func.max(Employee.salary), 0),
            )
        ).one()

        counts = {label: 0 for label, _, _ in TENURE_BUCKETS}
        join_dates = self.db.execute(select(Employee.date_of_joining)).scalars()
        for date_of_joining in join_dates:
            months = experience_from_date(date_of_joining, today).months
            counts[bucket_for(months)] += 1

        return SalaryDashboardResponse(
            avg_salary=float(avg_salary),
            max_salary=float(max_salary),
            distribution=[
                BucketCount(label=label, count=counts[label])
                for label, _, _ in TENURE_BUCKETS
            ],
        )
