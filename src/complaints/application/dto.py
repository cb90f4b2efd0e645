"""
Complaints Application DTOs
===========================

Data Transfer Objects for the complaints API layer.

These Pydantic models handle serialization/deserialization and validation
for API requests and responses.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.accounts.application.dto import UserSummary
from src.config import MAX_ATTACHMENTS
from src.shared.api.schemas import Pagination


# ========== Type Aliases for Literals ==========
StatusStr = Literal["pending", "in-progress", "resolved", "rejected"]
PriorityStr = Literal["low", "medium", "high", "critical"]
CategoryStr = Literal[
    "IT", "Infrastructure", "Library", "Hostel", "Transport",
    "Canteen", "Academic", "Administrative", "Security", "Other",
]


# ========== Request DTOs ==========

class CreateComplaintRequest(BaseModel):
    """Request model for filing a complaint."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=5, max_length=200, description="Short summary")
    category: CategoryStr = Field(..., description="Complaint category")
    description: str = Field(..., min_length=10, max_length=2000, description="Full description")
    priority: Optional[PriorityStr] = Field(None, description="Defaults to medium")
    attachments: List[str] = Field(
        default_factory=list,
        max_length=MAX_ATTACHMENTS,
        description="File references (URLs or paths), at most 5"
    )


class UpdateStatusRequest(BaseModel):
    """Request model for a status change."""
    model_config = ConfigDict(str_strip_whitespace=True)

    status: StatusStr = Field(..., description="New status")
    note: Optional[str] = Field(None, description="Timeline note; becomes the resolution note (max 1000 chars) when resolving")


class AssignRequest(BaseModel):
    """Request model for assigning a complaint."""
    assigned_to: str = Field(..., min_length=1, description="ID of a staff or admin user")


class UpdatePriorityRequest(BaseModel):
    """Request model for a priority change."""
    priority: PriorityStr


# ========== Response DTOs ==========

class TimelineEntryResponse(BaseModel):
    """Response model for one timeline entry."""
    id: str
    status: StatusStr
    note: str
    updated_by_id: str
    updated_by: Optional[UserSummary] = Field(None, description="Null when the user no longer exists")
    timestamp: datetime


class ComplaintResponse(BaseModel):
    """Response model for a complaint with its referenced users resolved."""
    id: str
    user_id: str
    user: Optional[UserSummary] = Field(None, description="Author; null when the account was deleted")
    title: str
    category: CategoryStr
    description: str
    attachments: List[str] = Field(default_factory=list)
    status: StatusStr
    priority: PriorityStr
    assigned_to_id: Optional[str] = None
    assigned_to: Optional[UserSummary] = None
    timeline: List[TimelineEntryResponse] = Field(default_factory=list)
    resolution_note: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolution_time: Optional[float] = Field(None, description="Hours from creation to first resolution")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, complaint, users: Dict[str, object]) -> "ComplaintResponse":
        def summary(user_id: Optional[str]) -> Optional[UserSummary]:
            user = users.get(user_id) if user_id else None
            return UserSummary.from_entity(user) if user else None

        return cls(
            id=complaint.id,
            user_id=complaint.user_id,
            user=summary(complaint.user_id),
            title=complaint.title,
            category=complaint.category.value,
            description=complaint.description,
            attachments=list(complaint.attachments),
            status=complaint.status.value,
            priority=complaint.priority.value,
            assigned_to_id=complaint.assigned_to,
            assigned_to=summary(complaint.assigned_to),
            timeline=[
                TimelineEntryResponse(
                    id=entry.id,
                    status=entry.status.value,
                    note=entry.note,
                    updated_by_id=entry.updated_by,
                    updated_by=summary(entry.updated_by),
                    timestamp=entry.timestamp,
                )
                for entry in complaint.timeline
            ],
            resolution_note=complaint.resolution_note,
            resolved_at=complaint.resolved_at,
            resolution_time=complaint.resolution_time,
            created_at=complaint.created_at,
            updated_at=complaint.updated_at,
        )


class ComplaintPayload(BaseModel):
    complaint: ComplaintResponse


class ComplaintListPayload(BaseModel):
    complaints: List[ComplaintResponse]
    pagination: Pagination
