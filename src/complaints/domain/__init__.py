"""
Complaints Domain Layer
=======================

Contains:
- Entities: Complaint, TimelineEntry (immutable)
- Lifecycle: explicit transition functions returning new Complaints
- Access: the policy table applied to complaint records

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from src.complaints.domain.entities import Complaint, TimelineEntry
from src.complaints.domain.lifecycle import (
    open_complaint,
    apply_status_change,
    assign_complaint,
    change_priority,
    resolution_time_hours,
)
from src.complaints.domain.access import authorize_complaint, list_filters_for

__all__ = [
    # Entities
    "Complaint",
    "TimelineEntry",
    # Lifecycle
    "open_complaint",
    "apply_status_change",
    "assign_complaint",
    "change_priority",
    "resolution_time_hours",
    # Access
    "authorize_complaint",
    "list_filters_for",
]
