"""Timer and time entry schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.taskflow.models import SummaryPeriod


class TimerStartRequest(BaseModel):
    task_id: UUID
    start_time: datetime | None = None
    description: str | None = Field(default=None, max_length=255)


class TimerStopRequest(BaseModel):
    end_time: datetime | None = None


class ManualEntryCreate(BaseModel):
    task_id: UUID
    duration_minutes: int = Field(ge=1)
    start_time: datetime | None = None
    description: str | None = Field(default=None, max_length=255)


class TimeEntryUpdate(BaseModel):
    """Partial edit. Omitted fields are left alone; explicit nulls clear."""

    model_config = ConfigDict(extra="forbid")

    start_time: datetime | None = None
    end_time: datetime | None = None
    description: str | None = Field(default=None, max_length=255)


class TimeEntryRead(BaseModel):
    id: UUID
    task_id: UUID
    user_id: UUID
    start_time: datetime
    end_time: datetime | None
    duration: int | None
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActiveTimerRead(TimeEntryRead):
    task_title: str
    project_id: UUID
    project_name: str
    project_color: str


class SummaryItem(BaseModel):
    project_id: UUID
    project_name: str
    project_color: str
    task_id: UUID
    task_title: str
    total_seconds: int
    sessions: int


class TimeSummary(BaseModel):
    period: SummaryPeriod
    since: datetime
    items: list[SummaryItem]
    total_seconds: int
    total_hours: float
