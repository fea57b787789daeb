"""Timer and time entry endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.taskflow.api.dependencies import CurrentUser, TaskAccess, TimeEntryAccess, TimerServiceDep
from src.taskflow.api.outcomes import raise_for_outcome
from src.taskflow.models import SummaryPeriod, TimeEntry
from src.taskflow.schemas.pagination import PaginatedResponse
from src.taskflow.schemas.time_entry import (
    ActiveTimerRead,
    ManualEntryCreate,
    SummaryItem,
    TimeEntryRead,
    TimeEntryUpdate,
    TimerStartRequest,
    TimerStopRequest,
    TimeSummary,
)
from src.taskflow.services.outcomes import Deleted

router = APIRouter(prefix="/time", tags=["time"])


@router.post(
    "/start",
    response_model=TimeEntryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Start timer",
    description=(
        "Start a timer on a task. A user has at most one running timer. "
        "A task still in `todo` moves to `in_progress`."
    ),
    responses={
        403: {"description": "Task belongs to another user"},
        404: {"description": "Task not found"},
        409: {
            "description": "A timer is already running",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "A timer is already running",
                        "active_entry_id": "0192f0c4-7a2b-7c3d-9e4f-5a6b7c8d9e0f",
                        "request_id": "3f2b8c1e9a7d4f60",
                    }
                }
            },
        },
    },
)
async def start_timer(
    data: TimerStartRequest, current_user: CurrentUser, service: TimerServiceDep
) -> TimeEntryRead:
    result = await service.start_timer(
        current_user.id, data.task_id, start_time=data.start_time, description=data.description
    )
    if not isinstance(result, TimeEntry):
        raise_for_outcome(result, "task")
    return TimeEntryRead.model_validate(result)


@router.post(
    "/stop",
    response_model=TimeEntryRead,
    summary="Stop timer",
    responses={
        400: {"description": "end_time is before the entry's start_time"},
        404: {"description": "No active timer"},
    },
)
async def stop_timer(
    current_user: CurrentUser,
    service: TimerServiceDep,
    data: TimerStopRequest | None = None,
) -> TimeEntryRead:
    end_time = data.end_time if data else None
    result = await service.stop_timer(current_user.id, end_time=end_time)
    if not isinstance(result, TimeEntry):
        raise_for_outcome(result, "time_entry")
    return TimeEntryRead.model_validate(result)


@router.get(
    "/active",
    response_model=ActiveTimerRead | None,
    summary="Active timer",
    description="The running entry with its task and project, or null.",
)
async def get_active_timer(
    current_user: CurrentUser, service: TimerServiceDep
) -> ActiveTimerRead | None:
    row = await service.get_active_timer(current_user.id)
    if row is None:
        return None
    return ActiveTimerRead(
        **TimeEntryRead.model_validate(row.entry).model_dump(),
        task_title=row.task_title,
        project_id=row.project_id,
        project_name=row.project_name,
        project_color=row.project_color,
    )


@router.post(
    "/manual",
    response_model=TimeEntryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add manual entry",
    description="Record finished work. Without start_time the entry ends now.",
    responses={
        403: {"description": "Task belongs to another user"},
        404: {"description": "Task not found"},
    },
)
async def create_manual_entry(
    data: ManualEntryCreate, current_user: CurrentUser, service: TimerServiceDep
) -> TimeEntryRead:
    result = await service.create_manual_entry(
        current_user.id,
        data.task_id,
        data.duration_minutes,
        start_time=data.start_time,
        description=data.description,
    )
    if not isinstance(result, TimeEntry):
        raise_for_outcome(result, "task")
    return TimeEntryRead.model_validate(result)


@router.get("/summary", response_model=TimeSummary, summary="Time summary")
async def get_summary(
    current_user: CurrentUser,
    service: TimerServiceDep,
    period: Annotated[SummaryPeriod, Query()] = SummaryPeriod.WEEK,
) -> TimeSummary:
    """Totals of finished entries per task for today, the last 7 days or the last 30."""
    since, rows, total_seconds = await service.summarize(current_user.id, period)
    return TimeSummary(
        period=period,
        since=since,
        items=[
            SummaryItem(
                project_id=row.project_id,
                project_name=row.project_name,
                project_color=row.project_color,
                task_id=row.task_id,
                task_title=row.task_title,
                total_seconds=row.total_seconds,
                sessions=row.sessions,
            )
            for row in rows
        ],
        total_seconds=total_seconds,
        total_hours=round(total_seconds / 3600, 2),
    )


@router.get(
    "/tasks/{task_id}",
    response_model=PaginatedResponse[TimeEntryRead],
    summary="List task entries",
    responses={
        403: {"description": "Task belongs to another user"},
        404: {"description": "Task not found"},
    },
)
async def list_task_entries(
    task_id: UUID,
    _access: TaskAccess,
    service: TimerServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[TimeEntryRead]:
    entries, next_cursor, has_more = await service.list_task_entries(task_id, cursor, limit)
    return PaginatedResponse(
        items=[TimeEntryRead.model_validate(e) for e in entries],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.patch(
    "/entries/{entry_id}",
    response_model=TimeEntryRead,
    summary="Edit time entry",
    description=(
        "Only fields present in the body change; an explicit null clears. "
        "Duration follows the resulting start/end pair."
    ),
    responses={
        400: {"description": "Resulting range is negative"},
        403: {"description": "Time entry belongs to another user"},
        404: {"description": "Time entry not found"},
        409: {"description": "Re-opening would create a second running timer"},
    },
)
async def edit_time_entry(
    entry_id: UUID,
    data: TimeEntryUpdate,
    _access: TimeEntryAccess,
    service: TimerServiceDep,
) -> TimeEntryRead:
    result = await service.edit_time_entry(entry_id, data.model_dump(exclude_unset=True))
    if not isinstance(result, TimeEntry):
        raise_for_outcome(result, "time_entry")
    return TimeEntryRead.model_validate(result)


@router.delete(
    "/entries/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete time entry",
    responses={
        403: {"description": "Time entry belongs to another user"},
        404: {"description": "Time entry not found"},
    },
)
async def delete_time_entry(
    entry_id: UUID, _access: TimeEntryAccess, service: TimerServiceDep
) -> None:
    result = await service.delete_time_entry(entry_id)
    if not isinstance(result, Deleted):
        raise_for_outcome(result, "time_entry")
