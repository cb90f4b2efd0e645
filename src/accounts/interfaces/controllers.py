"""
Auth Controllers (API Routes)
=============================

FastAPI routes for registration, login and self-service profile endpoints.

Controllers are thin - they delegate to AuthService.
"""

from fastapi import APIRouter, Depends, status

from src.accounts.application import (
    AuthPayload,
    AuthService,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserPayload,
    UserResponse,
)
from src.accounts.domain import User
from src.accounts.interfaces.dependencies import get_auth_service, get_current_user
from src.shared.api.schemas import ApiResponse

router = APIRouter(prefix="/api/auth", tags=["Auth"])


AUTH_RESPONSE_EXAMPLE = {
    "success": True,
    "message": "Login successful",
    "data": {
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "user": {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "name": "John Doe",
            "email": "john@example.com",
            "role": "user",
            "is_active": True,
            "department": None,
            "created_at": "2024-01-15T10:00:00Z",
            "updated_at": "2024-01-15T10:00:00Z"
        }
    }
}


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Creates a `user`-role account and returns an access token. Duplicate email returns 409.",
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    user, token = await auth_service.register(
        name=request.name,
        email=request.email,
        password=request.password,
        department=request.department,
    )
    return ApiResponse(
        message="User registered successfully",
        data=AuthPayload(token=token, user=UserResponse.from_entity(user)),
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthPayload],
    summary="Login user",
    responses={
        200: {"content": {"application/json": {"example": AUTH_RESPONSE_EXAMPLE}}},
        401: {"description": "Invalid email or password"},
        403: {"description": "Account deactivated"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    user, token = await auth_service.login(request.email, request.password)
    return ApiResponse(
        message="Login successful",
        data=AuthPayload(token=token, user=UserResponse.from_entity(user)),
    )


@router.get("/me", response_model=ApiResponse[UserPayload], summary="Get current user profile")
async def get_me(user: User = Depends(get_current_user)):
    return ApiResponse(data=UserPayload(user=UserResponse.from_entity(user)))


@router.put("/profile", response_model=ApiResponse[UserPayload], summary="Update user profile")
async def update_profile(
    request: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    updated = await auth_service.update_profile(user, name=request.name, department=request.department)
    return ApiResponse(
        message="Profile updated successfully",
        data=UserPayload(user=UserResponse.from_entity(updated)),
    )


@router.put("/change-password", response_model=ApiResponse[None], summary="Change user password")
async def change_password(
    request: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    await auth_service.change_password(user, request.current_password, request.new_password)
    return ApiResponse(message="Password changed successfully")


# Export router for inclusion in main app
auth_router = router
