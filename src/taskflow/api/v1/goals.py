"""Goal endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from src.taskflow.api.dependencies import CurrentUser, GoalAccess, GoalServiceDep
from src.taskflow.api.outcomes import raise_for_outcome
from src.taskflow.models import Goal, GoalType
from src.taskflow.schemas.goal import GoalCreate, GoalRead, GoalUpdate
from src.taskflow.schemas.pagination import PaginatedResponse
from src.taskflow.services import GoalService

router = APIRouter(prefix="/goals", tags=["goals"])


async def _get_or_404(service: GoalService, goal_id: UUID) -> Goal:
    goal = await service.get(goal_id)
    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return goal


@router.get("", response_model=PaginatedResponse[GoalRead])
async def list_goals(
    current_user: CurrentUser,
    service: GoalServiceDep,
    goal_type: Annotated[GoalType | None, Query(alias="type")] = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[GoalRead]:
    goals, next_cursor, has_more = await service.list_for_user(
        current_user.id, goal_type, cursor, limit
    )
    return PaginatedResponse(
        items=[GoalRead.model_validate(g) for g in goals],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
    data: GoalCreate, current_user: CurrentUser, service: GoalServiceDep
) -> GoalRead:
    return GoalRead.model_validate(await service.create(current_user.id, data))


@router.get("/{goal_id}", response_model=GoalRead)
async def get_goal(goal_id: UUID, _access: GoalAccess, service: GoalServiceDep) -> GoalRead:
    return GoalRead.model_validate(await _get_or_404(service, goal_id))


@router.patch(
    "/{goal_id}",
    response_model=GoalRead,
    description="Partial update; `achieved` is recomputed from the new values.",
)
async def update_goal(
    goal_id: UUID, data: GoalUpdate, _access: GoalAccess, service: GoalServiceDep
) -> GoalRead:
    goal = await _get_or_404(service, goal_id)
    result = await service.update(goal, data)
    if not isinstance(result, Goal):
        raise_for_outcome(result, "goal")
    return GoalRead.model_validate(result)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: UUID, _access: GoalAccess, service: GoalServiceDep) -> None:
    await service.delete(await _get_or_404(service, goal_id))
