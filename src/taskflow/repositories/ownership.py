"""Owner lookups along the ownership chain."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.taskflow.models import Goal, Project, Task, TimeEntry


class OwnershipRepository:
    """One join-path query per resource type, each resolving the owning user.

    Every lookup returns ``None`` when the resource does not exist.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def project_owner(self, project_id: UUID) -> UUID | None:
        result = await self.session.execute(
            select(Project.user_id).where(Project.id == project_id)
        )
        return result.scalar_one_or_none()

    async def task_owner(self, task_id: UUID) -> UUID | None:
        result = await self.session.execute(
            select(Project.user_id)
            .join(Task, Task.project_id == Project.id)
            .where(Task.id == task_id)
        )
        return result.scalar_one_or_none()

    async def time_entry_owners(self, entry_id: UUID) -> tuple[UUID, UUID] | None:
        """Return ``(chain_owner, cached_user_id)`` for a time entry."""
        result = await self.session.execute(
            select(Project.user_id, TimeEntry.user_id)
            .join(Task, Task.id == TimeEntry.task_id)
            .join(Project, Project.id == Task.project_id)
            .where(TimeEntry.id == entry_id)
        )
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def goal_owner(self, goal_id: UUID) -> UUID | None:
        result = await self.session.execute(select(Goal.user_id).where(Goal.id == goal_id))
        return result.scalar_one_or_none()
