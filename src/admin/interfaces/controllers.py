"""
Admin Controllers (API Routes)
==============================

FastAPI routes for the admin dashboard and user administration.

Controllers are thin - they delegate to AnalyticsService and
UserAdministrationService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.accounts.application import RoleStr, UserPayload, UserResponse
from src.accounts.domain import Action, Resource, User
from src.accounts.infrastructure.repositories import SQLAlchemyUserRepository
from src.accounts.interfaces import get_user_repository, require_permission
from src.admin.application import (
    AnalyticsResponse,
    AnalyticsService,
    StaffListPayload,
    StaffMember,
    UpdateRoleRequest,
    UserAdministrationService,
    UserDetailPayload,
    UserListPayload,
)
from src.complaints.infrastructure.repositories import SQLAlchemyComplaintRepository
from src.config import settings
from src.infrastructure.database import get_session
from src.shared.api.schemas import ApiResponse

router = APIRouter(prefix="/api/admin", tags=["Admin"])

require_user_admin = require_permission(Resource.USER, Action.MANAGE)
require_analytics = require_permission(Resource.ANALYTICS, Action.READ)


# ========== Dependencies ==========

async def get_analytics_service(
    session: AsyncSession = Depends(get_session),
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository)
) -> AnalyticsService:
    return AnalyticsService(SQLAlchemyComplaintRepository(session), user_repository)


async def get_user_admin_service(
    session: AsyncSession = Depends(get_session),
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository)
) -> UserAdministrationService:
    return UserAdministrationService(user_repository, SQLAlchemyComplaintRepository(session))


# ========== Routes ==========

@router.get(
    "/analytics",
    response_model=ApiResponse[AnalyticsResponse],
    summary="Dashboard analytics",
    description="""
    Complaint and user totals, per-status/category/priority breakdowns,
    the 30-day daily trend and the staff leaderboard by resolved complaints.
    """,
)
async def get_analytics(
    user: User = Depends(require_analytics),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return ApiResponse(data=await service.build_analytics())


@router.get("/staff", response_model=ApiResponse[StaffListPayload], summary="List assignable staff")
async def list_staff(
    user: User = Depends(require_user_admin),
    service: UserAdministrationService = Depends(get_user_admin_service)
):
    staff = await service.list_staff()
    return ApiResponse(data=StaffListPayload(staff=[StaffMember.from_entity(member) for member in staff]))


@router.get("/users", response_model=ApiResponse[UserListPayload], summary="List users")
async def list_users(
    role: Optional[RoleStr] = Query(None, description="Filter by role"),
    search: Optional[str] = Query(None, max_length=100, description="Case-insensitive match on name or email"),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Results per page"),
    user: User = Depends(require_user_admin),
    service: UserAdministrationService = Depends(get_user_admin_service)
):
    filters = {"role": role, "search": search.strip() if search else None}
    users, pagination = await service.list_users(
        {key: value for key, value in filters.items() if value}, page=page, limit=limit
    )
    return ApiResponse(data=UserListPayload(
        users=[UserResponse.from_entity(u) for u in users],
        pagination=pagination,
    ))


@router.get(
    "/users/{user_id}",
    response_model=ApiResponse[UserDetailPayload],
    summary="Get a user with complaint statistics",
)
async def get_user(
    user_id: str = Path(..., description="User UUID"),
    user: User = Depends(require_user_admin),
    service: UserAdministrationService = Depends(get_user_admin_service)
):
    target, statistics = await service.get_user(user_id)
    return ApiResponse(data=UserDetailPayload(user=UserResponse.from_entity(target), statistics=statistics))


@router.put(
    "/users/{user_id}/role",
    response_model=ApiResponse[UserPayload],
    summary="Change a user's role",
    responses={400: {"description": "Invalid role, or attempt to change your own role"}},
)
async def update_user_role(
    request: UpdateRoleRequest,
    user_id: str = Path(..., description="User UUID"),
    user: User = Depends(require_user_admin),
    service: UserAdministrationService = Depends(get_user_admin_service)
):
    updated = await service.change_role(user, user_id, request.role)
    return ApiResponse(
        message="User role updated successfully",
        data=UserPayload(user=UserResponse.from_entity(updated)),
    )


@router.put(
    "/users/{user_id}/toggle-status",
    response_model=ApiResponse[UserPayload],
    summary="Activate or deactivate a user",
)
async def toggle_user_status(
    user_id: str = Path(..., description="User UUID"),
    user: User = Depends(require_user_admin),
    service: UserAdministrationService = Depends(get_user_admin_service)
):
    updated = await service.toggle_status(user, user_id)
    state = "activated" if updated.is_active else "deactivated"
    return ApiResponse(
        message=f"User {state} successfully",
        data=UserPayload(user=UserResponse.from_entity(updated)),
    )


@router.delete(
    "/users/{user_id}",
    response_model=ApiResponse[None],
    summary="Delete a user",
    description="The user's complaints are kept.",
)
async def delete_user(
    user_id: str = Path(..., description="User UUID"),
    user: User = Depends(require_user_admin),
    service: UserAdministrationService = Depends(get_user_admin_service)
):
    await service.delete_user(user, user_id)
    return ApiResponse(message="User deleted successfully")


# Export router for inclusion in main app
admin_router = router
