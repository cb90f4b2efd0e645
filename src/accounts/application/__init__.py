"""
Accounts Application Layer
==========================

Contains:
- Services: AuthService and the user repository interface
- DTOs: Request/response models for the auth API
"""

from src.accounts.application.dto import (
    RegisterRequest,
    LoginRequest,
    UpdateProfileRequest,
    ChangePasswordRequest,
    UserResponse,
    UserSummary,
    AuthPayload,
    UserPayload,
    RoleStr,
)
from src.accounts.application.services import AuthService, IUserRepository

__all__ = [
    # DTOs
    "RegisterRequest",
    "LoginRequest",
    "UpdateProfileRequest",
    "ChangePasswordRequest",
    "UserResponse",
    "UserSummary",
    "AuthPayload",
    "UserPayload",
    "RoleStr",
    # Services
    "AuthService",
    # Repository Interfaces
    "IUserRepository",
]
