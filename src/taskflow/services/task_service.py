"""Task management."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core.exceptions import InternalError
from src.taskflow.core.logging import get_logger
from src.taskflow.models import Task, TaskPriority, TaskStatus
from src.taskflow.models.base import utc_now
from src.taskflow.repositories import TaskRepository
from src.taskflow.schemas.task import TaskCreate, TaskUpdate, TaskWithTracking
from src.taskflow.services.outcomes import Allowed, Forbidden, NotFound
from src.taskflow.services.ownership import OwnershipGuard, ResourceType

logger = get_logger(__name__)


class TaskService:
    """Create, list and update tasks.

    Status changes always go through ``Task.transition_to`` so that
    ``completed_at`` tracks the completed status.
    """

    def __init__(self, task_repo: TaskRepository, guard: OwnershipGuard, session: AsyncSession):
        self.task_repo = task_repo
        self.guard = guard
        self.session = session

    async def create(self, user_id: UUID, data: TaskCreate) -> Task | NotFound | Forbidden:
        """Create a task in a project the user owns."""
        access = await self.guard.check(ResourceType.PROJECT, data.project_id, user_id)
        if not isinstance(access, Allowed):
            return access

        task = Task(
            project_id=data.project_id,
            title=data.title,
            description=data.description,
            priority=data.priority.value,
            due_date=data.due_date,
        )
        try:
            self.task_repo.add(task)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("task.create") from e

        logger.info("Task created", task_id=str(task.id), project_id=str(data.project_id))
        return task

    async def get(self, task_id: UUID) -> Task | None:
        return await self.task_repo.get_by_id(task_id)

    async def list_for_project(
        self,
        project_id: UUID,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[TaskWithTracking], str | None, bool]:
        """List a project's tasks with the seconds tracked on each."""
        tasks, next_cursor, has_more = await self.task_repo.list_for_project(
            project_id, status=status, priority=priority, cursor=cursor, limit=limit
        )
        tracked = await self.task_repo.tracked_seconds([t.id for t in tasks])
        items = [
            TaskWithTracking.model_validate(t, from_attributes=True).model_copy(
                update={"tracked_seconds": tracked.get(t.id, 0)}
            )
            for t in tasks
        ]
        return items, next_cursor, has_more

    async def update(self, task: Task, data: TaskUpdate) -> Task:
        """Apply a partial update. A status change stamps or clears completed_at."""
        update_data = data.model_dump(exclude_unset=True)
        now = utc_now()
        try:
            new_status = update_data.pop("status", None)
            if new_status is not None:
                task.transition_to(TaskStatus(new_status), now)

            if "priority" in update_data:
                priority = update_data.pop("priority")
                if priority is not None:
                    task.priority = TaskPriority(priority).value

            if "title" in update_data and update_data["title"] is None:
                update_data.pop("title")

            for field, value in update_data.items():
                setattr(task, field, value)

            task.updated_at = now
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("task.update") from e

        return task

    async def toggle(self, task: Task) -> Task:
        """Flip between completed and todo."""
        completed = task.status == TaskStatus.COMPLETED.value
        target = TaskStatus.TODO if completed else TaskStatus.COMPLETED
        try:
            task.transition_to(target, utc_now())
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("task.toggle") from e

        logger.info("Task toggled", task_id=str(task.id), status=task.status)
        return task

    async def delete(self, task: Task) -> None:
        """Delete a task together with its time entries."""
        try:
            await self.task_repo.delete(task)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("task.delete") from e
