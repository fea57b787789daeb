"""Project management."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core.config import get_settings
from src.taskflow.core.exceptions import InternalError
from src.taskflow.core.logging import get_logger
from src.taskflow.models import Project
from src.taskflow.models.base import utc_now
from src.taskflow.repositories import ProjectRepository
from src.taskflow.schemas.project import ProjectCreate, ProjectUpdate, ProjectWithStats

logger = get_logger(__name__)


class ProjectService:
    def __init__(self, project_repo: ProjectRepository, session: AsyncSession):
        self.project_repo = project_repo
        self.session = session

    async def create(self, user_id: UUID, data: ProjectCreate) -> Project:
        project = Project(
            user_id=user_id,
            name=data.name,
            description=data.description,
            color=data.color or get_settings().default_project_color,
        )
        try:
            self.project_repo.add(project)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("project.create") from e

        logger.info("Project created", project_id=str(project.id))
        return project

    async def get(self, project_id: UUID) -> Project | None:
        return await self.project_repo.get_by_id(project_id)

    async def list_for_user(
        self, user_id: UUID, cursor: str | None = None, limit: int = 100
    ) -> tuple[list[ProjectWithStats], str | None, bool]:
        """List the user's projects with their task counts."""
        projects, next_cursor, has_more = await self.project_repo.list_for_user(
            user_id, cursor=cursor, limit=limit
        )
        counts = await self.project_repo.task_counts([p.id for p in projects])
        items = [
            ProjectWithStats.model_validate(p, from_attributes=True).model_copy(
                update={"task_count": counts.get(p.id, 0)}
            )
            for p in projects
        ]
        return items, next_cursor, has_more

    async def update(self, project: Project, data: ProjectUpdate) -> Project:
        update_data = data.model_dump(exclude_unset=True)
        # name and color are not nullable
        for field in ("name", "color"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        try:
            for field, value in update_data.items():
                setattr(project, field, value)
            project.updated_at = utc_now()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("project.update") from e
        return project

    async def delete(self, project: Project) -> None:
        """Delete a project; its tasks and time entries go with it."""
        project_id = project.id
        try:
            await self.project_repo.delete(project)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("project.delete") from e

        logger.info("Project deleted", project_id=str(project_id))
