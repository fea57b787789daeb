"""Route-level ownership checks."""

from collections.abc import Awaitable, Callable
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from src.taskflow.api.dependencies.auth import CurrentUser
from src.taskflow.api.dependencies.services import OwnershipGuardDep
from src.taskflow.api.outcomes import raise_for_outcome
from src.taskflow.services import ResourceType
from src.taskflow.services.outcomes import Allowed, NotFound


def require_ownership(
    resource_type: ResourceType, path_param: str
) -> Callable[..., Awaitable[Allowed]]:
    """Build a dependency that authorizes the current user for ``{path_param}``.

    Usage:
        @router.get("/{task_id}")
        async def get_task(
            access: Annotated[Allowed, Depends(require_ownership(ResourceType.TASK, "task_id"))],
        ): ...

    Missing resources become 404 and foreign ones 403.
    """

    async def dependency(
        request: Request, current_user: CurrentUser, guard: OwnershipGuardDep
    ) -> Allowed:
        try:
            resource_id = UUID(str(request.path_params.get(path_param)))
        except ValueError:
            raise_for_outcome(NotFound(), resource_type.value)

        outcome = await guard.check(resource_type, resource_id, current_user.id)
        if not isinstance(outcome, Allowed):
            raise_for_outcome(outcome, resource_type.value)
        return outcome

    return dependency


ProjectAccess = Annotated[Allowed, Depends(require_ownership(ResourceType.PROJECT, "project_id"))]
TaskAccess = Annotated[Allowed, Depends(require_ownership(ResourceType.TASK, "task_id"))]
TimeEntryAccess = Annotated[
    Allowed, Depends(require_ownership(ResourceType.TIME_ENTRY, "entry_id"))
]
GoalAccess = Annotated[Allowed, Depends(require_ownership(ResourceType.GOAL, "goal_id"))]
