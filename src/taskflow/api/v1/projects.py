"""Project endpoints.

Routes addressing a single project run the ownership guard first
(``ProjectAccess``): unknown ids are 404, other users' projects 403.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from src.taskflow.api.dependencies import (
    CurrentUser,
    ProjectAccess,
    ProjectServiceDep,
    TaskServiceDep,
)
from src.taskflow.models import Project, TaskPriority, TaskStatus
from src.taskflow.schemas.pagination import PaginatedResponse
from src.taskflow.schemas.project import (
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    ProjectWithStats,
)
from src.taskflow.schemas.task import TaskWithTracking
from src.taskflow.services import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


async def _get_or_404(service: ProjectService, project_id: UUID) -> Project:
    # Deleted between the ownership check and the load
    project = await service.get(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.get(
    "",
    response_model=PaginatedResponse[ProjectWithStats],
    summary="List projects",
    description="List the current user's projects, newest first, with task counts.",
)
async def list_projects(
    current_user: CurrentUser,
    service: ProjectServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectWithStats]:
    items, next_cursor, has_more = await service.list_for_user(
        current_user.id, cursor=cursor, limit=limit
    )
    return PaginatedResponse(items=items, next_cursor=next_cursor, has_more=has_more)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
async def create_project(
    data: ProjectCreate, current_user: CurrentUser, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.create(current_user.id, data)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        403: {"description": "Project belongs to another user"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID, _access: ProjectAccess, service: ProjectServiceDep
) -> ProjectRead:
    return ProjectRead.model_validate(await _get_or_404(service, project_id))


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    responses={
        403: {"description": "Project belongs to another user"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    _access: ProjectAccess,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await _get_or_404(service, project_id)
    return ProjectRead.model_validate(await service.update(project, data))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project together with its tasks and their time entries.",
    responses={
        403: {"description": "Project belongs to another user"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID, _access: ProjectAccess, service: ProjectServiceDep
) -> None:
    project = await _get_or_404(service, project_id)
    await service.delete(project)


@router.get(
    "/{project_id}/tasks",
    response_model=PaginatedResponse[TaskWithTracking],
    summary="List project tasks",
    description="Tasks of a project, newest first, with the seconds tracked on each.",
    responses={
        403: {"description": "Project belongs to another user"},
        404: {"description": "Project not found"},
    },
)
async def list_project_tasks(
    project_id: UUID,
    _access: ProjectAccess,
    service: TaskServiceDep,
    task_status: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: Annotated[TaskPriority | None, Query()] = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[TaskWithTracking]:
    items, next_cursor, has_more = await service.list_for_project(
        project_id, status=task_status, priority=priority, cursor=cursor, limit=limit
    )
    return PaginatedResponse(items=items, next_cursor=next_cursor, has_more=has_more)
