"""Task model and its status rules."""

from datetime import date, datetime
from uuid import UUID, uuid7

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.taskflow.models.base import utc_now
from src.taskflow.models.enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    """A unit of work inside a project.

    ``completed_at`` is non-null exactly when ``status`` is completed. Go
    through ``transition_to`` to change the status so both stay in step.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_tasks_priority"),
        CheckConstraint(
            "status IN ('todo', 'in_progress', 'completed')", name="ck_tasks_status"
        ),
        CheckConstraint(
            "(status = 'completed') = (completed_at IS NOT NULL)",
            name="ck_tasks_completed_at_matches_status",
        ),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=10)
    status: str = Field(default=TaskStatus.TODO.value, max_length=20, index=True)
    due_date: date | None = Field(default=None)
    completed_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def transition_to(self, new_status: TaskStatus, at: datetime) -> bool:
        """Move the task to ``new_status`` at server time ``at``.

        Entering completed stamps ``completed_at``; leaving it clears the stamp.

        Returns:
            False if the task already had that status (nothing changes).
        """
        if self.status == new_status.value:
            return False

        self.status = new_status.value
        self.completed_at = at if new_status is TaskStatus.COMPLETED else None
        self.updated_at = at
        return True
