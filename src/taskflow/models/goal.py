"""Goal model."""

from datetime import date, datetime
from uuid import UUID, uuid7

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.taskflow.models.base import utc_now


class Goal(SQLModel, table=True):
    """A periodic target (e.g. 10 hours per week) owned by a user."""

    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("type IN ('daily', 'weekly', 'monthly')", name="ck_goals_type"),
        CheckConstraint("unit IN ('tasks', 'hours', 'projects')", name="ck_goals_unit"),
        CheckConstraint("target_value > 0", name="ck_goals_target_positive"),
        CheckConstraint("end_date >= start_date", name="ck_goals_date_range"),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    type: str = Field(max_length=20)
    target_value: int
    current_value: int = Field(default=0)
    unit: str = Field(max_length=20)
    start_date: date
    end_date: date
    achieved: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def refresh_achieved(self) -> None:
        """Recompute ``achieved`` from the current progress."""
        self.achieved = self.current_value >= self.target_value
