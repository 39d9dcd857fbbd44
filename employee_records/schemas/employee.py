"""
Pydantic schemas for employee records.

Field names are snake_case in Python and camelCase on the
wire (dateOfJoining, experienceMonths, ...). populate_by_name
lets services build these models with either spelling.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Largest value a NUMERIC(12, 2) column holds
MAX_SALARY = Decimal("9999999999.99")
CENT = Decimal("0.01")


def to_cents(value: Decimal | None) -> Decimal | None:
    """Round a salary half-up to whole cents, the precision it is stored at."""
    if value is None:
        return None
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# --- Request Schemas ---

class EmployeeCreate(CamelModel):
    """Fields required to create a record. Salary may be zero, never negative."""
    name: str = Field(min_length=1, max_length=200)
    date_of_joining: date
    salary: Decimal = Field(ge=0, le=MAX_SALARY)
    owner_id: int | None = None

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("salary")
    @classmethod
    def round_salary_to_cents(cls, v: Decimal | None) -> Decimal | None:
        return to_cents(v)


class EmployeeUpdate(CamelModel):
    """Partial update; only the fields that were sent are applied."""
    name: str | None = Field(default=None, min_length=1, max_length=200)
    date_of_joining: date | None = None
    salary: Decimal | None = Field(default=None, ge=0, le=MAX_SALARY)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("salary")
    @classmethod
    def round_salary_to_cents(cls, v: Decimal | None) -> Decimal | None:
        return to_cents(v)


class EmployeeFilters(CamelModel):
    """
    Optional list filters. Every absent field imposes no constraint.

    Experience bounds are in whole calendar months.
    """
    name: str | None = None
    min_salary: Decimal | None = Field(default=None, ge=0)
    max_salary: Decimal | None = Field(default=None, ge=0)
    min_experience_months: int | None = Field(default=None, ge=0)
    max_experience_months: int | None = Field(default=None, ge=0)

    def applied(self) -> dict:
        """Filters that were actually given, for audit metadata."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


# --- Response Schemas ---

class AvatarInfo(CamelModel):
    filename: str | None
    content_type: str | None
    size: int | None


class EmployeeResponse(CamelModel):
    """An employee record annotated with experience derived at read time."""
    id: int
    owner_id: int
    name: str
    date_of_joining: date
    salary: float
    avatar: AvatarInfo | None = None
    experience_months: int
    experience_years: int
    created_at: datetime
    updated_at: datetime


class DeleteResponse(CamelModel):
    ok: bool = True
