"""
Admin Application Services
==========================

Dashboard analytics and user administration. Both services work only
through the account and complaint repository interfaces.
"""

import math
from collections import Counter
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from src.accounts.application.services import IUserRepository
from src.accounts.domain import User
from src.admin.application.dto import (
    AnalyticsOverview,
    AnalyticsResponse,
    CategoryCount,
    StaffPerformance,
    TrendPoint,
    UserStatistics,
)
from src.complaints.application.services import IComplaintRepository
from src.config import ComplaintStatus, Priority, Role, settings
from src.core import DomainException, ResourceNotFoundException
from src.core.timeutils import utcnow
from src.shared.api.schemas import Pagination, page_offset
from src.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class AnalyticsService:
    """
    Builds the admin dashboard.

    Breakdowns come from grouped queries. The daily trend and the average
    resolution time are folded in Python so they behave the same on every
    database backend.
    """

    def __init__(self, complaint_repository: IComplaintRepository, user_repository: IUserRepository):
        self._complaint_repo = complaint_repository
        self._user_repo = user_repository

    async def build_analytics(self, now: Optional[datetime] = None) -> AnalyticsResponse:
        now = now or utcnow()

        with log_latency(logger, "analytics_query"):
            overview = AnalyticsOverview(
                total_complaints=await self._complaint_repo.count(),
                total_users=await self._user_repo.count(),
                recent_complaints=await self._complaint_repo.count(
                    {"created_since": now - timedelta(days=settings.recent_window_days)}
                ),
                avg_resolution_time=await self._average_resolution_hours(),
            )

            by_status = await self._complaint_repo.count_by("status")
            by_category = await self._complaint_repo.count_by("category")
            by_priority = await self._complaint_repo.count_by("priority")
            by_role = await self._user_repo.count_by_role()

            return AnalyticsResponse(
                overview=overview,
                status_breakdown={s.value: by_status.get(s.value, 0) for s in ComplaintStatus},
                category_breakdown=[
                    CategoryCount(category=category, count=count)
                    for category, count in sorted(by_category.items(), key=lambda item: (-item[1], item[0]))
                ],
                priority_breakdown={p.value: by_priority.get(p.value, 0) for p in Priority},
                user_role_breakdown={r.value: by_role.get(r.value, 0) for r in Role},
                complaints_trend=await self._daily_trend(now),
                staff_performance=await self._staff_performance(),
            )

    async def _average_resolution_hours(self) -> int:
        intervals = await self._complaint_repo.resolution_intervals()
        if not intervals:
            return 0
        total_hours = sum((resolved - created).total_seconds() / 3600 for created, resolved in intervals)
        return _round_half_up(total_hours / len(intervals))

    async def _daily_trend(self, now: datetime) -> List[TrendPoint]:
        since = now - timedelta(days=settings.trend_window_days)
        timestamps = await self._complaint_repo.created_timestamps_since(since)
        per_day = Counter(ts.date().isoformat() for ts in timestamps)
        return [TrendPoint(date=day, count=per_day[day]) for day in sorted(per_day)]

    async def _staff_performance(self) -> List[StaffPerformance]:
        ranking = await self._complaint_repo.resolved_count_by_assignee()
        users = await self._user_repo.get_many(assignee_id for assignee_id, _ in ranking)

        performance = []
        for assignee_id, resolved in ranking:
            user = users.get(assignee_id)
            if user is None:
                continue
            performance.append(StaffPerformance(id=user.id, name=user.name, email=user.email, resolved=resolved))
            if len(performance) == settings.staff_leaderboard_size:
                break
        return performance


class UserAdministrationService:
    """
    Admin-side user management.

    An admin can never change the role of, deactivate, or delete their own
    account. Deleting a user leaves their complaints in place.
    """

    def __init__(self, user_repository: IUserRepository, complaint_repository: IComplaintRepository):
        self._user_repo = user_repository
        self._complaint_repo = complaint_repository

    async def _get_or_404(self, user_id: str) -> User:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return user

    async def list_users(self, filters: dict, page: int = 1, limit: int = 10) -> Tuple[List[User], Pagination]:
        users = await self._user_repo.list(filters, limit=limit, offset=page_offset(page, limit))
        total = await self._user_repo.count(filters)
        return users, Pagination.build(total, page, limit)

    async def get_user(self, user_id: str) -> Tuple[User, UserStatistics]:
        """User plus counts of the complaints they filed."""
        user = await self._get_or_404(user_id)
        statistics = UserStatistics(
            total_complaints=await self._complaint_repo.count({"user_id": user.id}),
            pending_complaints=await self._complaint_repo.count(
                {"user_id": user.id, "status": ComplaintStatus.PENDING.value}
            ),
            resolved_complaints=await self._complaint_repo.count(
                {"user_id": user.id, "status": ComplaintStatus.RESOLVED.value}
            ),
        )
        return user, statistics

    async def change_role(self, actor: User, user_id: str, role: str) -> User:
        user = await self._get_or_404(user_id)
        if user.id == actor.id:
            raise DomainException("Cannot change your own role")

        updated = await self._user_repo.update(user.with_role(role))
        logger.info(
            "User role changed",
            extra={"user_id": user.id, "from_role": user.role.value, "to_role": updated.role.value, "changed_by": actor.id}
        )
        return updated

    async def toggle_status(self, actor: User, user_id: str) -> User:
        user = await self._get_or_404(user_id)
        if user.id == actor.id:
            raise DomainException("Cannot deactivate your own account")

        updated = await self._user_repo.update(user.with_active(not user.is_active))
        logger.info(
            "User status toggled",
            extra={"user_id": user.id, "is_active": updated.is_active, "changed_by": actor.id}
        )
        return updated

    async def delete_user(self, actor: User, user_id: str) -> None:
        user = await self._get_or_404(user_id)
        if user.id == actor.id:
            raise DomainException("Cannot delete your own account")

        await self._user_repo.delete(user.id)
        logger.info("User deleted", extra={"user_id": user.id, "deleted_by": actor.id})

    async def list_staff(self) -> List[User]:
        """Active staff and admins, the candidates for assignment."""
        return await self._user_repo.list_assignable()
