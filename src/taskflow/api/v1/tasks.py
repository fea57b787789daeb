"""Task endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from src.taskflow.api.dependencies import CurrentUser, TaskAccess, TaskServiceDep
from src.taskflow.api.outcomes import raise_for_outcome
from src.taskflow.models import Task
from src.taskflow.schemas.task import TaskCreate, TaskRead, TaskUpdate
from src.taskflow.services import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

OWNERSHIP_RESPONSES: dict[int | str, dict[str, str]] = {
    403: {"description": "Task belongs to another user"},
    404: {"description": "Task not found"},
}


async def _get_or_404(service: TaskService, task_id: UUID) -> Task:
    task = await service.get(task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    responses={
        403: {"description": "Project belongs to another user"},
        404: {"description": "Project not found"},
    },
)
async def create_task(
    data: TaskCreate, current_user: CurrentUser, service: TaskServiceDep
) -> TaskRead:
    result = await service.create(current_user.id, data)
    if not isinstance(result, Task):
        raise_for_outcome(result, "project")
    return TaskRead.model_validate(result)


@router.get("/{task_id}", response_model=TaskRead, responses=OWNERSHIP_RESPONSES)
async def get_task(task_id: UUID, _access: TaskAccess, service: TaskServiceDep) -> TaskRead:
    return TaskRead.model_validate(await _get_or_404(service, task_id))


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update task",
    description=(
        "Partial update. Moving to `completed` stamps `completed_at` with the "
        "server time; moving away clears it."
    ),
    responses=OWNERSHIP_RESPONSES,
)
async def update_task(
    task_id: UUID, data: TaskUpdate, _access: TaskAccess, service: TaskServiceDep
) -> TaskRead:
    task = await _get_or_404(service, task_id)
    return TaskRead.model_validate(await service.update(task, data))


@router.post(
    "/{task_id}/toggle",
    response_model=TaskRead,
    summary="Toggle completion",
    description="Completed tasks go back to `todo`; anything else becomes `completed`.",
    responses=OWNERSHIP_RESPONSES,
)
async def toggle_task(task_id: UUID, _access: TaskAccess, service: TaskServiceDep) -> TaskRead:
    task = await _get_or_404(service, task_id)
    return TaskRead.model_validate(await service.toggle(task))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=OWNERSHIP_RESPONSES,
)
async def delete_task(task_id: UUID, _access: TaskAccess, service: TaskServiceDep) -> None:
    task = await _get_or_404(service, task_id)
    await service.delete(task)
