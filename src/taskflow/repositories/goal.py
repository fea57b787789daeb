"""Repository for Goal entity."""

from uuid import UUID

from sqlmodel import select

from src.taskflow.models import Goal, GoalType
from src.taskflow.repositories.base import BaseRepository


class GoalRepository(BaseRepository[Goal]):
    model = Goal

    async def list_for_user(
        self,
        user_id: UUID,
        goal_type: GoalType | None = None,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[Goal], str | None, bool]:
        """List a user's goals, newest first."""
        query = select(Goal).where(Goal.user_id == user_id)
        if goal_type is not None:
            query = query.where(Goal.type == goal_type.value)
        return await self.paginate(query, cursor, limit, Goal.created_at)
