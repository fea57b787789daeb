from src.taskflow.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
)
from src.taskflow.schemas.goal import GoalCreate, GoalRead, GoalUpdate
from src.taskflow.schemas.pagination import PaginatedResponse
from src.taskflow.schemas.project import (
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    ProjectWithStats,
)
from src.taskflow.schemas.task import TaskCreate, TaskRead, TaskUpdate, TaskWithTracking
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
from src.taskflow.schemas.user import UserRead, UserUpdate

__all__ = [
    "ActiveTimerRead",
    "GoalCreate",
    "GoalRead",
    "GoalUpdate",
    "LoginRequest",
    "LogoutRequest",
    "ManualEntryCreate",
    "PaginatedResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "ProjectWithStats",
    "RefreshRequest",
    "RegisterRequest",
    "SummaryItem",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TaskWithTracking",
    "TimeEntryRead",
    "TimeEntryUpdate",
    "TimeSummary",
    "TimerStartRequest",
    "TimerStopRequest",
    "TokenPair",
    "UserRead",
    "UserUpdate",
]
