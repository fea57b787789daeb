"""Repository for Task entity."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.taskflow.models import Task, TaskPriority, TaskStatus, TimeEntry
from src.taskflow.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    model = Task

    async def list_for_project(
        self,
        project_id: UUID,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[Task], str | None, bool]:
        """List tasks of a project, newest first, optionally filtered."""
        query = select(Task).where(Task.project_id == project_id)
        if status is not None:
            query = query.where(Task.status == status.value)
        if priority is not None:
            query = query.where(Task.priority == priority.value)
        return await self.paginate(query, cursor, limit, Task.created_at)

    async def tracked_seconds(self, task_ids: list[UUID]) -> dict[UUID, int]:
        """Total closed-entry seconds per task."""
        if not task_ids:
            return {}
        result = await self.session.execute(
            select(TimeEntry.task_id, func.coalesce(func.sum(TimeEntry.duration), 0))
            .where(
                TimeEntry.task_id.in_(task_ids),  # type: ignore[attr-defined]
                TimeEntry.end_time.is_not(None),  # type: ignore[union-attr]
            )
            .group_by(TimeEntry.task_id)
        )
        return {task_id: int(total) for task_id, total in result.all()}
