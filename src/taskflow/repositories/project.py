"""Repository for Project entity."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.taskflow.models import Project, Task
from src.taskflow.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_for_user(
        self,
        user_id: UUID,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[Project], str | None, bool]:
        """List a user's projects, newest first."""
        query = select(Project).where(Project.user_id == user_id)
        return await self.paginate(query, cursor, limit, Project.created_at)

    async def task_counts(self, project_ids: list[UUID]) -> dict[UUID, int]:
        """Number of tasks per project for the given projects."""
        if not project_ids:
            return {}
        result = await self.session.execute(
            select(Task.project_id, func.count(Task.id))
            .where(Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
            .group_by(Task.project_id)
        )
        return {project_id: count for project_id, count in result.all()}
