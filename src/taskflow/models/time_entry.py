"""Time entry model."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlalchemy import CheckConstraint, Index, text
from sqlmodel import Field, SQLModel

from src.taskflow.models.base import utc_now


class TimeEntry(SQLModel, table=True):
    """A span of tracked time against a task.

    ``end_time IS NULL`` marks a running timer. ``user_id`` caches the owner
    derived through task -> project -> user and must always agree with it.
    """

    __tablename__ = "time_entries"
    __table_args__ = (
        # At most one running timer per user, enforced by storage
        Index(
            "uq_time_entries_one_open_per_user",
            "user_id",
            unique=True,
            postgresql_where=text("end_time IS NULL"),
        ),
        Index("ix_time_entries_user_start", "user_id", "start_time"),
        CheckConstraint("duration IS NULL OR duration >= 0", name="ck_time_entries_duration"),
        CheckConstraint(
            "(end_time IS NULL) = (duration IS NULL)",
            name="ck_time_entries_duration_when_closed",
        ),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    start_time: datetime
    end_time: datetime | None = Field(default=None)
    duration: int | None = Field(default=None)  # whole seconds
    description: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
