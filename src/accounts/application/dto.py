"""
Accounts Application DTOs
=========================

Pydantic models for account API requests and responses.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

RoleStr = Literal["user", "staff", "admin"]


# ========== Request DTOs ==========

class RegisterRequest(BaseModel):
    """Request model for self-registration. New accounts always get the user role."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=50, description="Display name")
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=6, max_length=72, description="Plaintext password")
    department: Optional[str] = Field(None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: EmailStr) -> str:
        """Normalize email to lowercase."""
        return str(v).lower()


class LoginRequest(BaseModel):
    """Request model for login."""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    """Request model for profile changes."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=2, max_length=50)
    department: Optional[str] = Field(None, max_length=100)


class ChangePasswordRequest(BaseModel):
    """Request model for password change."""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=72)


# ========== Response DTOs ==========

class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""
    id: str
    name: str
    email: str
    role: RoleStr
    is_active: bool
    department: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            is_active=user.is_active,
            department=user.department,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserSummary(BaseModel):
    """Compact user reference embedded in complaint responses."""
    id: str
    name: str
    email: str
    department: Optional[str] = None

    @classmethod
    def from_entity(cls, user) -> "UserSummary":
        return cls(id=user.id, name=user.name, email=user.email, department=user.department)


class AuthPayload(BaseModel):
    """Token plus the signed-in user."""
    token: str
    user: UserResponse


class UserPayload(BaseModel):
    user: UserResponse
