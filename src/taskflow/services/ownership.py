"""Ownership guard: authorizes an acting user against a resource instance."""

from enum import Enum
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.taskflow.core.exceptions import InternalError
from src.taskflow.core.logging import get_logger
from src.taskflow.repositories import OwnershipRepository
from src.taskflow.services.outcomes import Access, Allowed, Forbidden, NotFound

logger = get_logger(__name__)


class ResourceType(str, Enum):
    PROJECT = "project"
    TASK = "task"
    TIME_ENTRY = "time_entry"
    GOAL = "goal"


class OwnershipGuard:
    """Resolves the owning user of a resource by walking its ownership chain.

    The chain TimeEntry -> Task -> Project -> User is the only authorization
    path. A time entry whose cached ``user_id`` disagrees with the chain owner
    is never allowed.

    Read-only: the guard never writes and never commits.
    """

    def __init__(self, ownership_repo: OwnershipRepository):
        self.ownership_repo = ownership_repo

    async def check(
        self, resource_type: ResourceType, resource_id: UUID, acting_user_id: UUID
    ) -> Access:
        try:
            if resource_type is ResourceType.TIME_ENTRY:
                return await self._check_time_entry(resource_id, acting_user_id)

            match resource_type:
                case ResourceType.PROJECT:
                    owner_id = await self.ownership_repo.project_owner(resource_id)
                case ResourceType.TASK:
                    owner_id = await self.ownership_repo.task_owner(resource_id)
                case ResourceType.GOAL:
                    owner_id = await self.ownership_repo.goal_owner(resource_id)
        except SQLAlchemyError as e:
            raise InternalError(f"ownership.{resource_type.value}") from e

        if owner_id is None:
            return NotFound()
        if owner_id != acting_user_id:
            return Forbidden()
        return Allowed(owner_id=owner_id)

    async def _check_time_entry(self, entry_id: UUID, acting_user_id: UUID) -> Access:
        owners = await self.ownership_repo.time_entry_owners(entry_id)
        if owners is None:
            return NotFound()

        chain_owner, cached_owner = owners
        if chain_owner != cached_owner:
            logger.warning(
                "Time entry owner mismatch",
                time_entry_id=str(entry_id),
                chain_owner=str(chain_owner),
                cached_owner=str(cached_owner),
            )
            return Forbidden()
        if chain_owner != acting_user_id:
            return Forbidden()
        return Allowed(owner_id=chain_owner)
