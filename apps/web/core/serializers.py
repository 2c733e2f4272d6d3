"""
Pydantic schemas for the auth API.
"""

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """Request body for POST /api/auth/signup."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str = Field(default="", max_length=200)
    phone_number: str = Field(default="", max_length=20)


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class ProfileResponse(BaseModel):
    """The signed-in user's profile."""

    id: int
    email: str
    full_name: str
    phone_number: str
    role: str
    is_staff: bool
    is_admin: bool
