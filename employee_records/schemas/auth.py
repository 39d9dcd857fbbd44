"""
Pydantic schemas for signup and login.
"""

from pydantic import BaseModel, Field

from employee_records.models.enums import Role


class SignupRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=72)
    role: Role


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=72)


class UserResponse(BaseModel):
    id: int
    email: str
    role: Role

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Bearer token plus the identity it was issued for."""
    token: str
    user: UserResponse
