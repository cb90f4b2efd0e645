"""
Complaints Infrastructure Models
================================

SQLAlchemy ORM models for the complaints module.

`user_id` and `assigned_to` are deliberately not foreign keys: deleting a
user must leave their complaints in place.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config import ComplaintStatus, Priority
from src.infrastructure.database import Base


class ComplaintModel(Base):
    """
    Database model for Complaint entity.

    Maps to the 'complaints' table.
    """
    __tablename__ = "complaints"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # References (no FK cascade)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    assigned_to: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)

    # Content
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    attachments: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    # Lifecycle
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ComplaintStatus.PENDING.value, index=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default=Priority.MEDIUM.value, index=True)
    resolution_note: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    timeline: Mapped[List["TimelineEntryModel"]] = relationship(
        back_populates="complaint",
        order_by="TimelineEntryModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_complaints_user_status", "user_id", "status"),
        Index("ix_complaints_assignee_status", "assigned_to", "status"),
        Index("ix_complaints_category_status", "category", "status"),
    )


class TimelineEntryModel(Base):
    """
    Database model for a complaint timeline entry.

    Maps to the 'complaint_timeline' table. Rows are only ever inserted.
    """
    __tablename__ = "complaint_timeline"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    complaint_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    complaint: Mapped[ComplaintModel] = relationship(back_populates="timeline")
