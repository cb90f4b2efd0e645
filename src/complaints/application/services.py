"""
Complaints Application Services
===============================

Application services orchestrate complaint use cases. Every operation runs
the access policy first, then applies a lifecycle transition and persists
the result.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from src.accounts.application.services import IUserRepository
from src.accounts.domain import Action, User
from src.complaints.domain import (
    Complaint,
    apply_status_change,
    assign_complaint,
    authorize_complaint,
    change_priority,
    list_filters_for,
    open_complaint,
)
from src.core import ResourceNotFoundException, ValidationException
from src.shared.api.schemas import Pagination, page_offset
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class IComplaintRepository(ABC):
    """Interface for complaint data access."""

    @abstractmethod
    async def get_by_id(self, complaint_id: str) -> Optional[Complaint]:
        """Get complaint by ID; None for unknown or malformed IDs."""

    @abstractmethod
    async def create(self, complaint: Complaint) -> Complaint:
        """Persist a new complaint with its initial timeline."""

    @abstractmethod
    async def save(self, complaint: Complaint) -> Complaint:
        """Persist changes, appending timeline entries not stored yet."""

    @abstractmethod
    async def delete(self, complaint_id: str) -> None:
        """Delete a complaint and its timeline."""

    @abstractmethod
    async def list(self, filters: dict, limit: int = 10, offset: int = 0) -> List[Complaint]:
        """
        List complaints newest first.

        Filters: user_id, assigned_to, status, category, priority, search,
        created_since.
        """

    @abstractmethod
    async def count(self, filters: Optional[dict] = None) -> int:
        """Count complaints matching the same filters as list()."""

    @abstractmethod
    async def count_by(self, field: str) -> Dict[str, int]:
        """Number of complaints per status, category or priority."""

    @abstractmethod
    async def created_timestamps_since(self, since: datetime) -> List[datetime]:
        """Creation times of complaints filed at or after `since`."""

    @abstractmethod
    async def resolution_intervals(self) -> List[Tuple[datetime, datetime]]:
        """(created_at, resolved_at) of every resolved complaint."""

    @abstractmethod
    async def resolved_count_by_assignee(self) -> List[Tuple[str, int]]:
        """(assignee_id, resolved count), highest count first."""


# ========== Application Services ==========

class ComplaintService:
    """
    Application service for complaint operations.

    Returned complaints come with a user map (ID -> User) covering the
    author, the assignee and every timeline actor that still exists.
    """

    def __init__(self, complaint_repository: IComplaintRepository, user_repository: IUserRepository):
        self._complaint_repo = complaint_repository
        self._user_repo = user_repository

    async def related_users(self, complaints: Iterable[Complaint]) -> Dict[str, User]:
        """Load every user referenced by the given complaints."""
        user_ids = set()
        for complaint in complaints:
            user_ids.add(complaint.user_id)
            if complaint.assigned_to:
                user_ids.add(complaint.assigned_to)
            user_ids.update(entry.updated_by for entry in complaint.timeline)
        return await self._user_repo.get_many(user_ids)

    async def _get_or_404(self, complaint_id: str) -> Complaint:
        complaint = await self._complaint_repo.get_by_id(complaint_id)
        if complaint is None:
            raise ResourceNotFoundException("Complaint", complaint_id)
        return complaint

    async def _with_users(self, complaint: Complaint) -> Tuple[Complaint, Dict[str, User]]:
        return complaint, await self.related_users([complaint])

    async def _page(
        self,
        filters: dict,
        page: int,
        limit: int
    ) -> Tuple[List[Complaint], Dict[str, User], Pagination]:
        complaints = await self._complaint_repo.list(filters, limit=limit, offset=page_offset(page, limit))
        total = await self._complaint_repo.count(filters)
        users = await self.related_users(complaints)
        return complaints, users, Pagination.build(total, page, limit)

    async def create(
        self,
        actor: User,
        title: str,
        category: str,
        description: str,
        priority: Optional[str] = None,
        attachments: Iterable[str] = ()
    ) -> Tuple[Complaint, Dict[str, User]]:
        """File a new pending complaint authored by `actor`."""
        authorize_complaint(actor, Action.CREATE)

        complaint = open_complaint(
            author_id=actor.id,
            title=title,
            category=category,
            description=description,
            priority=priority,
            attachments=attachments,
        )
        complaint = await self._complaint_repo.create(complaint)

        logger.info(
            "Complaint created",
            extra={
                "complaint_id": complaint.id,
                "user_id": actor.id,
                "category": complaint.category.value,
                "priority": complaint.priority.value,
            }
        )
        return await self._with_users(complaint)

    async def list_mine(
        self,
        actor: User,
        filters: dict,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Complaint], Dict[str, User], Pagination]:
        """Complaints authored by `actor`, whatever their role."""
        return await self._page(list_filters_for(actor, Action.LIST_OWN, filters), page, limit)

    async def list_all(
        self,
        actor: User,
        filters: dict,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Complaint], Dict[str, User], Pagination]:
        """
        Every complaint the caller may see: all of them for admins, the
        caller's assigned complaints for staff.
        """
        return await self._page(list_filters_for(actor, Action.LIST, filters), page, limit)

    async def get(self, actor: User, complaint_id: str) -> Tuple[Complaint, Dict[str, User]]:
        """
        Fetch a single complaint.

        Raises:
            ResourceNotFoundException: Unknown or malformed ID
            AuthorizationException: Caller may not read this complaint
        """
        complaint = await self._get_or_404(complaint_id)
        authorize_complaint(actor, Action.READ, complaint)
        return await self._with_users(complaint)

    async def update_status(
        self,
        actor: User,
        complaint_id: str,
        status: str,
        note: Optional[str] = None
    ) -> Tuple[Complaint, Dict[str, User]]:
        """Change a complaint's status, recording the change on its timeline."""
        complaint = await self._get_or_404(complaint_id)
        authorize_complaint(actor, Action.UPDATE_STATUS, complaint)

        previous = complaint.status
        updated = apply_status_change(complaint, status, note, actor.id)
        if updated is not complaint:
            updated = await self._complaint_repo.save(updated)
            logger.info(
                "Complaint status updated",
                extra={
                    "complaint_id": complaint.id,
                    "from_status": previous.value,
                    "to_status": updated.status.value,
                    "updated_by": actor.id,
                }
            )
        return await self._with_users(updated)

    async def assign(
        self,
        actor: User,
        complaint_id: str,
        assignee_id: str
    ) -> Tuple[Complaint, Dict[str, User]]:
        """
        Assign a complaint to an active staff member or admin.

        Raises:
            ResourceNotFoundException: Unknown complaint or assignee
            ValidationException: Assignee is inactive or not staff
        """
        complaint = await self._get_or_404(complaint_id)
        authorize_complaint(actor, Action.ASSIGN, complaint)

        assignee = await self._user_repo.get_by_id(assignee_id)
        if assignee is None:
            raise ResourceNotFoundException("User", assignee_id)
        if not assignee.is_staff_member:
            raise ValidationException(
                "Complaints can only be assigned to staff or admin users",
                errors=[{"field": "assigned_to", "message": "User is not a staff member"}],
            )
        if not assignee.is_active:
            raise ValidationException(
                "Cannot assign complaints to a deactivated user",
                errors=[{"field": "assigned_to", "message": "User is deactivated"}],
            )

        updated = await self._complaint_repo.save(assign_complaint(complaint, assignee.id, actor.id))
        logger.info(
            "Complaint assigned",
            extra={"complaint_id": complaint.id, "assigned_to": assignee.id, "assigned_by": actor.id}
        )
        return await self._with_users(updated)

    async def update_priority(
        self,
        actor: User,
        complaint_id: str,
        priority: str
    ) -> Tuple[Complaint, Dict[str, User]]:
        """Change a complaint's priority."""
        complaint = await self._get_or_404(complaint_id)
        authorize_complaint(actor, Action.UPDATE_PRIORITY, complaint)

        updated = change_priority(complaint, priority)
        if updated is not complaint:
            updated = await self._complaint_repo.save(updated)
            logger.info(
                "Complaint priority updated",
                extra={"complaint_id": complaint.id, "priority": updated.priority.value}
            )
        return await self._with_users(updated)

    async def delete(self, actor: User, complaint_id: str) -> None:
        """Delete a complaint together with its timeline."""
        complaint = await self._get_or_404(complaint_id)
        authorize_complaint(actor, Action.DELETE, complaint)

        await self._complaint_repo.delete(complaint.id)
        logger.info("Complaint deleted", extra={"complaint_id": complaint.id, "deleted_by": actor.id})
