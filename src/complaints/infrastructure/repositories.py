"""
Complaints Infrastructure Repositories
======================================

SQLAlchemy implementation of the complaint repository interface,
including the grouped queries behind the admin dashboard.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.complaints.application.services import IComplaintRepository
from src.complaints.domain import Complaint, TimelineEntry
from src.complaints.infrastructure.models import ComplaintModel, TimelineEntryModel
from src.config import ComplaintStatus
from src.core import RepositoryException
from src.core.timeutils import ensure_utc


def _parse_uuid(value) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _entry_model(entry: TimelineEntry, position: int) -> TimelineEntryModel:
    return TimelineEntryModel(
        id=UUID(entry.id),
        position=position,
        status=entry.status.value,
        note=entry.note,
        updated_by=UUID(entry.updated_by),
        timestamp=entry.timestamp,
    )


def _to_entity(model: ComplaintModel) -> Complaint:
    return Complaint(
        id=str(model.id),
        user_id=str(model.user_id),
        title=model.title,
        category=model.category,
        description=model.description,
        priority=model.priority,
        status=model.status,
        created_at=model.created_at,
        updated_at=model.updated_at,
        timeline=tuple(
            TimelineEntry(
                id=str(entry.id),
                status=entry.status,
                note=entry.note,
                updated_by=str(entry.updated_by),
                timestamp=entry.timestamp,
            )
            for entry in model.timeline
        ),
        attachments=tuple(model.attachments or ()),
        assigned_to=str(model.assigned_to) if model.assigned_to else None,
        resolution_note=model.resolution_note,
        resolved_at=model.resolved_at,
    )


class SQLAlchemyComplaintRepository(IComplaintRepository):
    """
    SQLAlchemy implementation of complaint repository.

    Timeline rows are insert-only: save() adds entries it has not seen
    before and never touches existing ones.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, complaint_id: str) -> Optional[ComplaintModel]:
        complaint_uuid = _parse_uuid(complaint_id)
        if complaint_uuid is None:
            return None
        stmt = select(ComplaintModel).where(ComplaintModel.id == complaint_uuid)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, complaint_id: str) -> Optional[Complaint]:
        model = await self._get_model(complaint_id)
        return _to_entity(model) if model else None

    async def create(self, complaint: Complaint) -> Complaint:
        model = ComplaintModel(
            id=UUID(complaint.id),
            user_id=UUID(complaint.user_id),
            assigned_to=UUID(complaint.assigned_to) if complaint.assigned_to else None,
            title=complaint.title,
            category=complaint.category.value,
            description=complaint.description,
            attachments=list(complaint.attachments),
            status=complaint.status.value,
            priority=complaint.priority.value,
            resolution_note=complaint.resolution_note,
            resolved_at=complaint.resolved_at,
            created_at=complaint.created_at,
            updated_at=complaint.updated_at,
            timeline=[_entry_model(entry, position) for position, entry in enumerate(complaint.timeline)],
        )
        self._session.add(model)
        await self._session.flush()
        return _to_entity(model)

    async def save(self, complaint: Complaint) -> Complaint:
        model = await self._get_model(complaint.id)
        if model is None:
            raise RepositoryException(f"Complaint {complaint.id} not found")

        model.assigned_to = UUID(complaint.assigned_to) if complaint.assigned_to else None
        model.title = complaint.title
        model.category = complaint.category.value
        model.description = complaint.description
        model.attachments = list(complaint.attachments)
        model.status = complaint.status.value
        model.priority = complaint.priority.value
        model.resolution_note = complaint.resolution_note
        model.resolved_at = complaint.resolved_at
        model.updated_at = complaint.updated_at

        persisted = {str(entry.id) for entry in model.timeline}
        position = len(model.timeline)
        for entry in complaint.timeline:
            if entry.id in persisted:
                continue
            model.timeline.append(_entry_model(entry, position))
            position += 1

        await self._session.flush()
        return _to_entity(model)

    async def delete(self, complaint_id: str) -> None:
        model = await self._get_model(complaint_id)
        if model is None:
            raise RepositoryException(f"Complaint {complaint_id} not found")
        await self._session.delete(model)
        await self._session.flush()

    def _conditions(self, filters: Optional[dict]) -> list:
        filters = filters or {}
        conditions = []

        for key in ("user_id", "assigned_to"):
            if filters.get(key):
                value = _parse_uuid(filters[key])
                if value is None:
                    # Malformed id matches nothing
                    conditions.append(false())
                else:
                    conditions.append(getattr(ComplaintModel, key) == value)

        for key in ("status", "category", "priority"):
            if filters.get(key):
                conditions.append(getattr(ComplaintModel, key) == filters[key])

        if filters.get("search"):
            pattern = f"%{filters['search']}%"
            conditions.append(or_(
                ComplaintModel.title.ilike(pattern),
                ComplaintModel.description.ilike(pattern),
            ))

        if filters.get("created_since"):
            conditions.append(ComplaintModel.created_at >= filters["created_since"])

        return conditions

    async def list(self, filters: dict, limit: int = 10, offset: int = 0) -> List[Complaint]:
        stmt = select(ComplaintModel).where(*self._conditions(filters))
        stmt = stmt.order_by(ComplaintModel.created_at.desc()).limit(limit).offset(offset)

        result = await self._session.execute(stmt)
        return [_to_entity(model) for model in result.scalars().all()]

    async def count(self, filters: Optional[dict] = None) -> int:
        stmt = select(func.count()).select_from(ComplaintModel).where(*self._conditions(filters))
        result = await self._session.execute(stmt)
        return result.scalar_one()

    # ========== Aggregations ==========

    async def count_by(self, field: str) -> Dict[str, int]:
        if field not in ("status", "category", "priority"):
            raise RepositoryException(f"Cannot group complaints by '{field}'")

        column = getattr(ComplaintModel, field)
        result = await self._session.execute(select(column, func.count()).group_by(column))
        return {value: count for value, count in result.all()}

    async def created_timestamps_since(self, since: datetime) -> List[datetime]:
        stmt = select(ComplaintModel.created_at).where(ComplaintModel.created_at >= since)
        result = await self._session.execute(stmt)
        return [ensure_utc(value) for value in result.scalars().all()]

    async def resolution_intervals(self) -> List[Tuple[datetime, datetime]]:
        stmt = select(ComplaintModel.created_at, ComplaintModel.resolved_at).where(
            ComplaintModel.status == ComplaintStatus.RESOLVED.value,
            ComplaintModel.resolved_at.isnot(None),
        )
        result = await self._session.execute(stmt)
        return [(ensure_utc(created), ensure_utc(resolved)) for created, resolved in result.all()]

    async def resolved_count_by_assignee(self) -> List[Tuple[str, int]]:
        resolved = func.count().label("resolved")
        stmt = (
            select(ComplaintModel.assigned_to, resolved)
            .where(
                ComplaintModel.assigned_to.isnot(None),
                ComplaintModel.status == ComplaintStatus.RESOLVED.value,
            )
            .group_by(ComplaintModel.assigned_to)
            .order_by(resolved.desc())
        )
        result = await self._session.execute(stmt)
        return [(str(assignee), count) for assignee, count in result.all()]
