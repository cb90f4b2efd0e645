"""
Complaints Infrastructure Layer
===============================

Infrastructure implementations for complaints:
- Models: SQLAlchemy ORM models for complaints and their timeline
- Repositories: data access and dashboard aggregations (import from
  src.complaints.infrastructure.repositories)
"""

from src.complaints.infrastructure.models import ComplaintModel, TimelineEntryModel

__all__ = ["ComplaintModel", "TimelineEntryModel"]
