"""
Complaint Lifecycle
===================

Explicit transition functions for the complaint state machine.

Each function takes a Complaint and returns a new one; the input is never
modified. The timeline only ever grows:

    pending -> in-progress | resolved | rejected (and back)

Any status may follow any other. `resolved_at` is stamped on the first
transition to resolved and kept from then on.
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional
from uuid import uuid4

from src.config import ComplaintStatus, Priority
from src.core.timeutils import utcnow
from src.complaints.domain.entities import (
    Complaint,
    TimelineEntry,
    coerce_priority,
    coerce_status,
)

SUBMITTED_NOTE = "Complaint submitted"
ASSIGNED_NOTE = "Complaint assigned"


def _entry(status: ComplaintStatus, note: str, actor_id: str, at: datetime) -> TimelineEntry:
    return TimelineEntry(id=str(uuid4()), status=status, note=note, updated_by=actor_id, timestamp=at)


def open_complaint(
    author_id: str,
    title: str,
    category: str,
    description: str,
    priority: Optional[str] = None,
    attachments: Iterable[str] = (),
    at: Optional[datetime] = None,
) -> Complaint:
    """
    Create a pending complaint whose timeline starts with the submission entry.

    Args:
        author_id: User filing the complaint
        priority: Defaults to medium
        at: Creation time (defaults to now)
    """
    at = at or utcnow()
    return Complaint(
        id=str(uuid4()),
        user_id=author_id,
        title=title,
        category=category,
        description=description,
        priority=priority or Priority.MEDIUM,
        status=ComplaintStatus.PENDING,
        created_at=at,
        updated_at=at,
        timeline=(_entry(ComplaintStatus.PENDING, SUBMITTED_NOTE, author_id, at),),
        attachments=tuple(attachments),
    )


def apply_status_change(
    complaint: Complaint,
    new_status: str,
    note: Optional[str],
    actor_id: str,
    at: Optional[datetime] = None,
) -> Complaint:
    """
    Move a complaint to `new_status`.

    - Appends a timeline entry only when the status actually changes.
    - Sets `resolved_at` the first time the complaint becomes resolved.
    - A note given with a resolved status becomes the resolution note.

    Raises:
        ValidationException: If `new_status` is not a known status
    """
    status = coerce_status(new_status)
    note = (note or "").strip()
    at = at or utcnow()

    if status == complaint.status and not (status == ComplaintStatus.RESOLVED and note):
        return complaint

    timeline = complaint.timeline
    if status != complaint.status:
        timeline = timeline + (_entry(status, note, actor_id, at),)

    resolved_at = complaint.resolved_at
    resolution_note = complaint.resolution_note
    if status == ComplaintStatus.RESOLVED:
        if resolved_at is None:
            resolved_at = at
        if note:
            resolution_note = note

    return replace(
        complaint,
        status=status,
        timeline=timeline,
        resolved_at=resolved_at,
        resolution_note=resolution_note,
        updated_at=at,
    )


def assign_complaint(
    complaint: Complaint,
    assignee_id: str,
    actor_id: str,
    at: Optional[datetime] = None,
) -> Complaint:
    """Hand the complaint to `assignee_id`, recording the hand-off under the current status."""
    at = at or utcnow()
    return replace(
        complaint,
        assigned_to=assignee_id,
        timeline=complaint.timeline + (_entry(complaint.status, ASSIGNED_NOTE, actor_id, at),),
        updated_at=at,
    )


def change_priority(complaint: Complaint, priority: str, at: Optional[datetime] = None) -> Complaint:
    """Set a new priority. Priority changes are not part of the status timeline."""
    new_priority = coerce_priority(priority)
    if new_priority == complaint.priority:
        return complaint
    return replace(complaint, priority=new_priority, updated_at=at or utcnow())


def resolution_time_hours(complaint: Complaint) -> Optional[float]:
    """Hours from creation to first resolution, or None while unresolved."""
    return complaint.resolution_time
