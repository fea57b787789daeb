"""Repository for TimeEntry entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.taskflow.models import Project, Task, TimeEntry
from src.taskflow.repositories.base import BaseRepository


@dataclass(frozen=True, slots=True)
class ActiveTimerRow:
    entry: TimeEntry
    task_title: str
    project_id: UUID
    project_name: str
    project_color: str


@dataclass(frozen=True, slots=True)
class SummaryRow:
    project_id: UUID
    project_name: str
    project_color: str
    task_id: UUID
    task_title: str
    total_seconds: int
    sessions: int


class TimeEntryRepository(BaseRepository[TimeEntry]):
    model = TimeEntry

    async def get_open_for_user(
        self, user_id: UUID, for_update: bool = False
    ) -> TimeEntry | None:
        """The user's running entry, if any."""
        query = select(TimeEntry).where(
            TimeEntry.user_id == user_id,
            TimeEntry.end_time.is_(None),  # type: ignore[union-attr]
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_other_open_for_user(self, user_id: UUID, exclude_id: UUID) -> TimeEntry | None:
        """An open entry of the user other than ``exclude_id``."""
        result = await self.session.execute(
            select(TimeEntry).where(
                TimeEntry.user_id == user_id,
                TimeEntry.end_time.is_(None),  # type: ignore[union-attr]
                TimeEntry.id != exclude_id,
            )
        )
        return result.scalars().first()

    async def get_active_with_context(self, user_id: UUID) -> ActiveTimerRow | None:
        """The running entry joined with its task and project."""
        result = await self.session.execute(
            select(TimeEntry, Task.title, Project.id, Project.name, Project.color)
            .join(Task, Task.id == TimeEntry.task_id)
            .join(Project, Project.id == Task.project_id)
            .where(
                TimeEntry.user_id == user_id,
                TimeEntry.end_time.is_(None),  # type: ignore[union-attr]
            )
        )
        row = result.first()
        if row is None:
            return None
        entry, task_title, project_id, project_name, project_color = row
        return ActiveTimerRow(
            entry=entry,
            task_title=task_title,
            project_id=project_id,
            project_name=project_name,
            project_color=project_color,
        )

    async def list_for_task(
        self,
        task_id: UUID,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[TimeEntry], str | None, bool]:
        """Entries of a task, newest start first."""
        query = select(TimeEntry).where(TimeEntry.task_id == task_id)
        return await self.paginate(query, cursor, limit, TimeEntry.start_time)

    async def summarize_since(self, user_id: UUID, since: datetime) -> list[SummaryRow]:
        """Per-task totals of the user's closed entries started at or after ``since``."""
        total = func.sum(TimeEntry.duration).label("total_seconds")
        result = await self.session.execute(
            select(
                Project.id,
                Project.name,
                Project.color,
                Task.id,
                Task.title,
                total,
                func.count(TimeEntry.id),
            )
            .join(Task, Task.id == TimeEntry.task_id)
            .join(Project, Project.id == Task.project_id)
            .where(
                TimeEntry.user_id == user_id,
                TimeEntry.start_time >= since,
                TimeEntry.end_time.is_not(None),  # type: ignore[union-attr]
            )
            .group_by(Project.id, Project.name, Project.color, Task.id, Task.title)
            .order_by(total.desc())
        )
        return [
            SummaryRow(
                project_id=project_id,
                project_name=project_name,
                project_color=project_color,
                task_id=task_id,
                task_title=task_title,
                total_seconds=int(total_seconds or 0),
                sessions=sessions,
            )
            for (
                project_id,
                project_name,
                project_color,
                task_id,
                task_title,
                total_seconds,
                sessions,
            ) in result.all()
        ]
