"""
Pydantic schemas for the salary dashboard.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BucketCount(BaseModel):
    label: str
    count: int


class SalaryDashboardResponse(BaseModel):
    avg_salary: float
    max_salary: float
    distribution: list[BucketCount]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
