"""
Complaint Domain Entities
=========================

Pure Python domain entities for the complaint lifecycle.

Both entities are immutable. State changes go through the transition
functions in src.complaints.domain.lifecycle, which return new instances.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from src.config import Category, ComplaintStatus, Priority
from src.core import ValidationException
from src.core.timeutils import ensure_utc

RESOLUTION_NOTE_MAX_LENGTH = 1000


def coerce_status(value) -> ComplaintStatus:
    try:
        return ComplaintStatus(value)
    except ValueError:
        raise ValidationException(
            "Invalid status",
            errors=[{"field": "status", "message": f"Invalid status '{value}'"}],
        )


def coerce_priority(value) -> Priority:
    try:
        return Priority(value)
    except ValueError:
        raise ValidationException(
            "Invalid priority level",
            errors=[{"field": "priority", "message": f"Invalid priority level '{value}'"}],
        )


def coerce_category(value) -> Category:
    try:
        return Category(value)
    except ValueError:
        raise ValidationException(
            "Please select a valid category",
            errors=[{"field": "category", "message": f"Invalid category '{value}'"}],
        )


@dataclass(frozen=True)
class TimelineEntry:
    """One audit record: who moved the complaint to which status, and when."""

    id: str
    status: ComplaintStatus
    note: str
    updated_by: str
    timestamp: datetime

    def __post_init__(self):
        object.__setattr__(self, "status", coerce_status(self.status))
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))


@dataclass(frozen=True)
class Complaint:
    """
    Complaint entity.

    `user_id` and `assigned_to` are plain references; the referenced users
    may have been deleted since.
    """

    id: str
    user_id: str
    title: str
    category: Category
    description: str
    priority: Priority
    status: ComplaintStatus
    created_at: datetime
    updated_at: datetime
    timeline: Tuple[TimelineEntry, ...] = ()
    attachments: Tuple[str, ...] = ()
    assigned_to: Optional[str] = None
    resolution_note: Optional[str] = None
    resolved_at: Optional[datetime] = None

    def __post_init__(self):
        """Enforce the closed enumerations and normalize collections and timestamps."""
        object.__setattr__(self, "status", coerce_status(self.status))
        object.__setattr__(self, "priority", coerce_priority(self.priority))
        object.__setattr__(self, "category", coerce_category(self.category))
        object.__setattr__(self, "timeline", tuple(self.timeline))
        object.__setattr__(self, "attachments", tuple(self.attachments))
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))
        object.__setattr__(self, "updated_at", ensure_utc(self.updated_at))
        object.__setattr__(self, "resolved_at", ensure_utc(self.resolved_at))

        if self.resolution_note and len(self.resolution_note) > RESOLUTION_NOTE_MAX_LENGTH:
            raise ValidationException(
                "Resolution note cannot exceed 1000 characters",
                errors=[{"field": "note", "message": "Resolution note cannot exceed 1000 characters"}],
            )

    @property
    def resolution_time(self) -> Optional[float]:
        """Hours between creation and first resolution; None until resolved."""
        if self.resolved_at is None or self.created_at is None:
            return None
        return (self.resolved_at - self.created_at).total_seconds() / 3600
