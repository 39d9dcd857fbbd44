"""
List query construction.

Turns optional filters into one SELECT over employees. The
experience range is translated into a join-date range so the
database can filter on a stored column:

    more months of experience  ->  earlier join date

so a minimum number of months becomes an upper bound on the
join date, and a maximum becomes a lower bound. Bounds are
whole calendar months, the same granularity the tenure
calculation uses. A join date after the current month shows
zero months of experience but lies past the upper bound, so
it never matches an experience filter.
"""

from datetime import date

from sqlalchemy import Select, select

from employee_records.models.employee import Employee
from employee_records.schemas.employee import EmployeeFilters
from employee_records.services.tenure import (
    first_day_months_ago,
    last_day_months_ago,
)


# Open-ended maximum when only a minimum is given (~1000 years)
DEFAULT_MAX_EXPERIENCE_MONTHS = 12000
DEFAULT_MIN_EXPERIENCE_MONTHS = 0


def join_date_bounds(
    min_months: int | None, max_months: int | None, today: date
) -> tuple[date, date]:
    """Return (earliest, latest) join date matching the experience range."""
    if min_months is None:
        min_months = DEFAULT_MIN_EXPERIENCE_MONTHS
    if max_months is None:
        max_months = DEFAULT_MAX_EXPERIENCE_MONTHS

    earliest = first_day_months_ago(today, max_months)
    latest = last_day_months_ago(today, min_months)
    return earliest, latest


def build_employee_query(
    filters: EmployeeFilters,
    owner_id: int | None = None,
    today: date | None = None,
) -> Select:
    """
    Build the list query, newest records first.

    owner_id restricts results to one owner and is applied on
    top of every other filter; Employee-role callers always
    pass their own id here.
    """
    today = today or date.today()
    query = select(Employee)

    if owner_id is not None:
        query = query.where(Employee.owner_id == owner_id)

    if filters.name:
        query = query.where(
            Employee.name.icontains(filters.name, autoescape=True)
        )

    if filters.min_salary is not None:
        query = query.where(Employee.salary >= filters.min_salary)
    if filters.max_salary is not None:
        query = query.where(Employee.salary <= filters.max_salary)

    if (
        filters.min_experience_months is not None
        or filters.max_experience_months is not None
    ):
        earliest, latest = join_date_bounds(
            filters.min_experience_months,
            filters.max_experience_months,
            today,
        )
        query = query.where(
            Employee.date_of_joining >= earliest,
            Employee.date_of_joining <= latest,
        )

    return query.order_by(Employee.created_at.desc(), Employee.id.desc())
