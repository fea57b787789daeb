"""Project model."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.taskflow.models.base import utc_now

DEFAULT_PROJECT_COLOR = "#3B82F6"


class Project(SQLModel, table=True):
    """Top of the ownership chain below the user.

    Deleting a project cascades to its tasks and, through them, their
    time entries (database-level ON DELETE CASCADE).
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    color: str = Field(default=DEFAULT_PROJECT_COLOR, max_length=7)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
