"""Goal management."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core.exceptions import InternalError
from src.taskflow.models import Goal, GoalType
from src.taskflow.models.base import utc_now
from src.taskflow.repositories import GoalRepository
from src.taskflow.schemas.goal import GoalCreate, GoalUpdate
from src.taskflow.services.outcomes import InvalidTimeRange


class GoalService:
    def __init__(self, goal_repo: GoalRepository, session: AsyncSession):
        self.goal_repo = goal_repo
        self.session = session

    async def create(self, user_id: UUID, data: GoalCreate) -> Goal:
        goal = Goal(
            user_id=user_id,
            type=data.type.value,
            target_value=data.target_value,
            unit=data.unit.value,
            start_date=data.start_date,
            end_date=data.end_date,
        )
        goal.refresh_achieved()
        try:
            self.goal_repo.add(goal)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("goal.create") from e
        return goal

    async def get(self, goal_id: UUID) -> Goal | None:
        return await self.goal_repo.get_by_id(goal_id)

    async def list_for_user(
        self,
        user_id: UUID,
        goal_type: GoalType | None = None,
        cursor: str | None = None,
        limit: int = 100,
    ) -> tuple[list[Goal], str | None, bool]:
        return await self.goal_repo.list_for_user(user_id, goal_type, cursor, limit)

    async def update(self, goal: Goal, data: GoalUpdate) -> Goal | InvalidTimeRange:
        """Apply a partial update and recompute ``achieved``."""
        update_data = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }

        start = update_data.get("start_date", goal.start_date)
        end = update_data.get("end_date", goal.end_date)
        if end < start:
            return InvalidTimeRange(detail="end_date must not be before start_date")

        try:
            for field, value in update_data.items():
                setattr(goal, field, value)
            goal.refresh_achieved()
            goal.updated_at = utc_now()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("goal.update") from e
        return goal

    async def delete(self, goal: Goal) -> None:
        try:
            await self.goal_repo.delete(goal)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("goal.delete") from e
