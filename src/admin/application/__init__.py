"""
Admin Application Layer
=======================

Contains:
- Services: AnalyticsService, UserAdministrationService
- DTOs: Request/response models for the admin API
"""

from src.admin.application.dto import (
    UpdateRoleRequest,
    AnalyticsOverview,
    AnalyticsResponse,
    CategoryCount,
    TrendPoint,
    StaffPerformance,
    UserStatistics,
    UserDetailPayload,
    UserListPayload,
    StaffMember,
    StaffListPayload,
)
from src.admin.application.services import AnalyticsService, UserAdministrationService

__all__ = [
    # DTOs
    "UpdateRoleRequest",
    "AnalyticsOverview",
    "AnalyticsResponse",
    "CategoryCount",
    "TrendPoint",
    "StaffPerformance",
    "UserStatistics",
    "UserDetailPayload",
    "UserListPayload",
    "StaffMember",
    "StaffListPayload",
    # Services
    "AnalyticsService",
    "UserAdministrationService",
]
