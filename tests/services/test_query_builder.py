"""
Tests for list query construction.

Records are inserted directly and the built query is executed
against the test database with a fixed "today".
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from employee_records.models.employee import Employee
from employee_records.models.enums import Role
from employee_records.models.user import User
from employee_records.schemas.employee import EmployeeFilters
from employee_records.services.query_builder import (
    build_employee_query,
    join_date_bounds,
)

TODAY = date(2026, 10, 19)


@pytest.fixture
def owners(db_session):
    alice = User(email="alice@test.com", password_hash="x", role=Role.EMPLOYEE)
    bob = User(email="bob@test.com", password_hash="x", role=Role.EMPLOYEE)
    db_session.add_all([alice, bob])
    db_session.commit()
    return alice, bob


def add(db_session, owner, name, joined, salary, created_at=None):
    employee = Employee(
        owner_id=owner.id,
        name=name,
        date_of_joining=joined,
        salary=Decimal(salary),
    )
    if created_at is not None:
        employee.created_at = created_at
    db_session.add(employee)
    db_session.commit()
    return employee


def run(db_session, filters, owner_id=None):
    query = build_employee_query(filters, owner_id=owner_id, today=TODAY)
    return [e.name for e in db_session.execute(query).scalars().all()]


class TestJoinDateBounds:

    def test_min_months_is_upper_bound(self):
        earliest, latest = join_date_bounds(24, None, TODAY)
        assert latest == date(2024, 10, 31)
        assert earliest.year == 2026 - 1000

    def test_max_months_is_lower_bound(self):
        earliest, latest = join_date_bounds(None, 60, TODAY)
        assert earliest == date(2021, 10, 1)
        assert latest == date(2026, 10, 31)


class TestExperienceFilter:

    def test_range_excludes_short_and_includes_mid_tenure(self, db_session, owners):
        alice, _ = owners
        add(db_session, alice, "twelve", date(2025, 10, 19), "1000")
        add(db_session, alice, "thirty-six", date(2023, 10, 19), "1000")
        add(db_session, alice, "seventy", date(2020, 8, 2), "1000")

        names = run(db_session, EmployeeFilters(
            min_experience_months=24, max_experience_months=60,
        ))
        assert names == ["thirty-six"]

    def test_bounds_are_inclusive_by_calendar_month(self, db_session, owners):
        """
        Bounds follow calendar months, not 30-day blocks: a join on
        the 30th of the month 24 months back already counts as 24
        months, and the whole month 60 months back is in range.
        """
        alice, _ = owners
        # 24 months by calendar month, although the day is later than today's
        add(db_session, alice, "edge-24", date(2024, 10, 30), "1000")
        add(db_session, alice, "edge-60", date(2021, 10, 1), "1000")
        add(db_session, alice, "sixty-one", date(2021, 9, 30), "1000")

        names = run(db_session, EmployeeFilters(
            min_experience_months=24, max_experience_months=60,
        ))
        assert sorted(names) == ["edge-24", "edge-60"]

    def test_future_join_date_never_matches_experience_filter(
        self, db_session, owners
    ):
        """
        A future joiner shows zero months of experience but sits
        past the upper join-date bound, so even a range starting at
        zero leaves it out. Unfiltered lists still include it.
        """
        alice, _ = owners
        add(db_session, alice, "starts-soon", date(2027, 1, 1), "1000")
        add(db_session, alice, "this-month", date(2026, 10, 1), "1000")

        names = run(db_session, EmployeeFilters(
            min_experience_months=0, max_experience_months=5,
        ))
        assert names == ["this-month"]
        assert sorted(run(db_session, EmployeeFilters())) == [
            "starts-soon", "this-month",
        ]

    def test_only_minimum_keeps_long_tenure(self, db_session, owners):
        alice, _ = owners
        add(db_session, alice, "veteran", date(1975, 1, 1), "1000")
        add(db_session, alice, "new", date(2026, 9, 1), "1000")

        assert run(db_session, EmployeeFilters(min_experience_months=12)) == ["veteran"]


class TestOtherFilters:

    def test_name_is_case_insensitive_substring(self, db_session, owners):
        alice, _ = owners
        add(db_session, alice, "Jane Doe", date(2020, 1, 1), "1000")
        add(db_session, alice, "John Smith", date(2020, 1, 1), "1000")

        assert run(db_session, EmployeeFilters(name="ANE")) == ["Jane Doe"]

    def test_name_wildcards_are_literal(self, db_session, owners):
        """% and _ in the search term match themselves, not any text."""
        alice, _ = owners
        add(db_session, alice, "100% Jane", date(2020, 1, 1), "1000")
        add(db_session, alice, "Jane", date(2020, 1, 1), "1000")

        assert run(db_session, EmployeeFilters(name="0%")) == ["100% Jane"]

    def test_salary_range_is_inclusive(self, db_session, owners):
        alice, _ = owners
        add(db_session, alice, "low", date(2020, 1, 1), "999.99")
        add(db_session, alice, "at-min", date(2020, 1, 1), "1000")
        add(db_session, alice, "at-max", date(2020, 1, 1), "5000")
        add(db_session, alice, "high", date(2020, 1, 1), "5000.01")

        names = run(db_session, EmployeeFilters(
            min_salary=Decimal("1000"), max_salary=Decimal("5000"),
        ))
        assert sorted(names) == ["at-max", "at-min"]

    def test_no_filters_returns_everything_newest_first(self, db_session, owners):
        alice, bob = owners
        add(db_session, alice, "first", date(2020, 1, 1), "1", datetime(2026, 1, 1))
        add(db_session, bob, "third", date(2020, 1, 1), "1", datetime(2026, 3, 1))
        add(db_session, alice, "second", date(2020, 1, 1), "1", datetime(2026, 2, 1))

        assert run(db_session, EmployeeFilters()) == ["third", "second", "first"]


class TestOwnerScope:

    @pytest.mark.parametrize("filters", [
        EmployeeFilters(),
        EmployeeFilters(name="a"),
        EmployeeFilters(min_salary=Decimal("0")),
        EmployeeFilters(max_salary=Decimal("1000000")),
        EmployeeFilters(min_experience_months=0, max_experience_months=1000),
        EmployeeFilters(name="b", min_salary=Decimal("1"), max_experience_months=500),
    ])
    def test_owner_scope_always_applies(self, db_session, owners, filters):
        alice, bob = owners
        add(db_session, alice, "alice-record", date(2020, 1, 1), "5000")
        add(db_session, bob, "bob-record", date(2020, 1, 1), "5000")

        query = build_employee_query(filters, owner_id=alice.id, today=TODAY)
        results = db_session.execute(query).scalars().all()
        assert all(e.owner_id == alice.id for e in results)
