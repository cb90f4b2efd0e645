"""
Admin Application DTOs
======================

Request/response models for the admin dashboard and user administration.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.accounts.application.dto import RoleStr, UserResponse
from src.shared.api.schemas import Pagination


# ========== Request DTOs ==========

class UpdateRoleRequest(BaseModel):
    """Request model for a role change."""
    role: RoleStr = Field(..., description="New role: user, staff or admin")


# ========== Analytics ==========

class AnalyticsOverview(BaseModel):
    total_complaints: int
    total_users: int
    recent_complaints: int = Field(..., description="Complaints filed in the recent window (7 days by default)")
    avg_resolution_time: int = Field(..., description="Mean hours from creation to resolution, rounded; 0 when none")


class CategoryCount(BaseModel):
    category: str
    count: int


class TrendPoint(BaseModel):
    date: str = Field(..., description="UTC day, YYYY-MM-DD")
    count: int


class StaffPerformance(BaseModel):
    id: str
    name: str
    email: str
    resolved: int


class AnalyticsResponse(BaseModel):
    """Dashboard analytics."""
    overview: AnalyticsOverview
    status_breakdown: Dict[str, int]
    category_breakdown: List[CategoryCount] = Field(..., description="Sorted by count, highest first")
    priority_breakdown: Dict[str, int]
    user_role_breakdown: Dict[str, int]
    complaints_trend: List[TrendPoint] = Field(..., description="Days with at least one complaint, oldest first")
    staff_performance: List[StaffPerformance] = Field(..., description="Assignees ranked by resolved complaints")


# ========== Users ==========

class UserStatistics(BaseModel):
    total_complaints: int
    pending_complaints: int
    resolved_complaints: int


class UserDetailPayload(BaseModel):
    user: UserResponse
    statistics: UserStatistics


class UserListPayload(BaseModel):
    users: List[UserResponse]
    pagination: Pagination


class StaffMember(BaseModel):
    """Assignable user as listed for the assignment picker."""
    id: str
    name: str
    email: str
    role: RoleStr
    department: Optional[str] = None

    @classmethod
    def from_entity(cls, user) -> "StaffMember":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role.value, department=user.department)


class StaffListPayload(BaseModel):
    staff: List[StaffMember]
