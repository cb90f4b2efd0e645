"""
Complaint Controllers (API Routes)
==================================

FastAPI routes for filing, listing and working complaints.

Controllers are thin - they delegate to ComplaintService, which applies the
access policy to every record it touches.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.accounts.domain import Action, Resource, User
from src.accounts.infrastructure.repositories import SQLAlchemyUserRepository
from src.accounts.interfaces import get_current_user, get_user_repository, require_permission
from src.complaints.application import (
    AssignRequest,
    CategoryStr,
    ComplaintListPayload,
    ComplaintPayload,
    ComplaintResponse,
    ComplaintService,
    CreateComplaintRequest,
    PriorityStr,
    StatusStr,
    UpdatePriorityRequest,
    UpdateStatusRequest,
)
from src.complaints.infrastructure.repositories import SQLAlchemyComplaintRepository
from src.config import settings
from src.infrastructure.database import get_session
from src.shared.api.schemas import ApiResponse

router = APIRouter(prefix="/api/complaints", tags=["Complaints"])


# ========== Example payloads for Swagger ==========

CREATE_COMPLAINT_EXAMPLE = {
    "title": "Wi-Fi down in Block C",
    "category": "IT",
    "description": "The wireless network in Block C has been unreachable since this morning.",
    "priority": "high",
    "attachments": []
}

STATUS_UPDATE_EXAMPLE = {
    "status": "resolved",
    "note": "Access point replaced"
}


# ========== Dependencies ==========

async def get_complaint_service(
    session: AsyncSession = Depends(get_session),
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository)
) -> ComplaintService:
    return ComplaintService(SQLAlchemyComplaintRepository(session), user_repository)


def _list_filters(
    complaint_status: Optional[str],
    category: Optional[str],
    priority: Optional[str],
    search: Optional[str] = None,
    assigned_to: Optional[str] = None
) -> dict:
    filters = {
        "status": complaint_status,
        "category": category,
        "priority": priority,
        "search": search.strip() if search else None,
        "assigned_to": assigned_to,
    }
    return {key: value for key, value in filters.items() if value}


def _complaint_payload(complaint, users) -> ComplaintPayload:
    return ComplaintPayload(complaint=ComplaintResponse.from_entity(complaint, users))


# ========== Routes ==========

@router.post(
    "",
    response_model=ApiResponse[ComplaintPayload],
    status_code=status.HTTP_201_CREATED,
    summary="File a complaint",
    description="Creates a pending complaint authored by the caller. Priority defaults to `medium`.",
    openapi_extra={"requestBody": {"content": {"application/json": {"example": CREATE_COMPLAINT_EXAMPLE}}}},
)
async def create_complaint(
    request: CreateComplaintRequest,
    user: User = Depends(require_permission(Resource.COMPLAINT, Action.CREATE)),
    service: ComplaintService = Depends(get_complaint_service)
):
    complaint, users = await service.create(
        user,
        title=request.title,
        category=request.category,
        description=request.description,
        priority=request.priority,
        attachments=request.attachments,
    )
    return ApiResponse(message="Complaint created successfully", data=_complaint_payload(complaint, users))


@router.get(
    "/my",
    response_model=ApiResponse[ComplaintListPayload],
    summary="List my complaints",
    description="Complaints filed by the caller, newest first.",
)
async def list_my_complaints(
    complaint_status: Optional[StatusStr] = Query(None, alias="status", description="Filter by status"),
    category: Optional[CategoryStr] = Query(None, description="Filter by category"),
    priority: Optional[PriorityStr] = Query(None, description="Filter by priority"),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Results per page"),
    user: User = Depends(require_permission(Resource.COMPLAINT, Action.LIST_OWN)),
    service: ComplaintService = Depends(get_complaint_service)
):
    complaints, users, pagination = await service.list_mine(
        user, _list_filters(complaint_status, category, priority), page=page, limit=limit
    )
    return ApiResponse(data=ComplaintListPayload(
        complaints=[ComplaintResponse.from_entity(c, users) for c in complaints],
        pagination=pagination,
    ))


@router.get(
    "/all",
    response_model=ApiResponse[ComplaintListPayload],
    summary="List complaints",
    description="""
    Admins see every complaint. Staff see only complaints assigned to them;
    an `assigned_to` filter from staff is ignored.
    """,
)
async def list_all_complaints(
    complaint_status: Optional[StatusStr] = Query(None, alias="status", description="Filter by status"),
    category: Optional[CategoryStr] = Query(None, description="Filter by category"),
    priority: Optional[PriorityStr] = Query(None, description="Filter by priority"),
    search: Optional[str] = Query(None, max_length=200, description="Case-insensitive match on title or description"),
    assigned_to: Optional[str] = Query(None, description="Filter by assignee (admin only)"),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Results per page"),
    user: User = Depends(require_permission(Resource.COMPLAINT, Action.LIST)),
    service: ComplaintService = Depends(get_complaint_service)
):
    filters = _list_filters(complaint_status, category, priority, search=search, assigned_to=assigned_to)
    complaints, users, pagination = await service.list_all(user, filters, page=page, limit=limit)
    return ApiResponse(data=ComplaintListPayload(
        complaints=[ComplaintResponse.from_entity(c, users) for c in complaints],
        pagination=pagination,
    ))


@router.get(
    "/{complaint_id}",
    response_model=ApiResponse[ComplaintPayload],
    summary="Get a complaint",
    responses={
        403: {"description": "Caller is neither the author, the assignee nor an admin"},
        404: {"description": "Complaint not found"},
    },
)
async def get_complaint(
    complaint_id: str = Path(..., description="Complaint UUID"),
    user: User = Depends(get_current_user),
    service: ComplaintService = Depends(get_complaint_service)
):
    complaint, users = await service.get(user, complaint_id)
    return ApiResponse(data=_complaint_payload(complaint, users))


@router.put(
    "/{complaint_id}/status",
    response_model=ApiResponse[ComplaintPayload],
    summary="Update complaint status",
    description="""
    Staff may update complaints assigned to them; admins may update any.
    Setting `resolved` with a note stores it as the resolution note.
    """,
    openapi_extra={"requestBody": {"content": {"application/json": {"example": STATUS_UPDATE_EXAMPLE}}}},
)
async def update_complaint_status(
    request: UpdateStatusRequest,
    complaint_id: str = Path(..., description="Complaint UUID"),
    user: User = Depends(require_permission(Resource.COMPLAINT, Action.UPDATE_STATUS)),
    service: ComplaintService = Depends(get_complaint_service)
):
    complaint, users = await service.update_status(user, complaint_id, request.status, request.note)
    return ApiResponse(message="Complaint status updated successfully", data=_complaint_payload(complaint, users))


@router.put(
    "/{complaint_id}/assign",
    response_model=ApiResponse[ComplaintPayload],
    summary="Assign a complaint",
    description="Admin only. The assignee must be an active staff member or admin.",
)
async def assign_complaint(
    request: AssignRequest,
    complaint_id: str = Path(..., description="Complaint UUID"),
    user: User = Depends(require_permission(Resource.COMPLAINT, Action.ASSIGN)),
    service: ComplaintService = Depends(get_complaint_service)
):
    complaint, users = await service.assign(user, complaint_id, request.assigned_to)
    return ApiResponse(message="Complaint assigned successfully", data=_complaint_payload(complaint, users))


@router.put(
    "/{complaint_id}/priority",
    response_model=ApiResponse[ComplaintPayload],
    summary="Update complaint priority",
    description="Admin only.",
)
async def update_complaint_priority(
    request: UpdatePriorityRequest,
    complaint_id: str = Path(..., description="Complaint UUID"),
    user: User = Depends(require_permission(Resource.COMPLAINT, Action.UPDATE_PRIORITY)),
    service: ComplaintService = Depends(get_complaint_service)
):
    complaint, users = await service.update_priority(user, complaint_id, request.priority)
    return ApiResponse(message="Complaint priority updated successfully", data=_complaint_payload(complaint, users))


@router.delete(
    "/{complaint_id}",
    response_model=ApiResponse[None],
    summary="Delete a complaint",
    description="Admin only. Removes the complaint and its timeline.",
)
async def delete_complaint(
    complaint_id: str = Path(..., description="Complaint UUID"),
    user: User = Depends(require_permission(Resource.COMPLAINT, Action.DELETE)),
    service: ComplaintService = Depends(get_complaint_service)
):
    await service.delete(user, complaint_id)
    return ApiResponse(message="Complaint deleted successfully")


# Export router for inclusion in main app
complaint_router = router
