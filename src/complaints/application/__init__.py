"""
Complaints Application Layer
============================

Contains:
- Services: ComplaintService and the complaint repository interface
- DTOs: Request/response models for the complaints API
"""

from src.complaints.application.dto import (
    CreateComplaintRequest,
    UpdateStatusRequest,
    AssignRequest,
    UpdatePriorityRequest,
    TimelineEntryResponse,
    ComplaintResponse,
    ComplaintPayload,
    ComplaintListPayload,
    StatusStr,
    PriorityStr,
    CategoryStr,
)
from src.complaints.application.services import ComplaintService, IComplaintRepository

__all__ = [
    # DTOs
    "CreateComplaintRequest",
    "UpdateStatusRequest",
    "AssignRequest",
    "UpdatePriorityRequest",
    "TimelineEntryResponse",
    "ComplaintResponse",
    "ComplaintPayload",
    "ComplaintListPayload",
    "StatusStr",
    "PriorityStr",
    "CategoryStr",
    # Services
    "ComplaintService",
    # Repository Interfaces
    "IComplaintRepository",
]
