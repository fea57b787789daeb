"""Goal schemas."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from src.taskflow.models import GoalType, GoalUnit


class GoalCreate(BaseModel):
    type: GoalType
    target_value: int = Field(gt=0)
    unit: GoalUnit
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_dates(self) -> Self:
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class GoalUpdate(BaseModel):
    target_value: int | None = Field(default=None, gt=0)
    current_value: int | None = Field(default=None, ge=0)
    start_date: date | None = None
    end_date: date | None = None


class GoalRead(BaseModel):
    id: UUID
    type: GoalType
    target_value: int
    current_value: int
    unit: GoalUnit
    start_date: date
    end_date: date
    achieved: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
