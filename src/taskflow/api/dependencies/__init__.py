"""FastAPI dependency injection definitions."""

from src.taskflow.api.dependencies.auth import CurrentUser, get_current_user
from src.taskflow.api.dependencies.db import DBSession, get_db_session
from src.taskflow.api.dependencies.ownership import (
    GoalAccess,
    ProjectAccess,
    TaskAccess,
    TimeEntryAccess,
    require_ownership,
)
from src.taskflow.api.dependencies.repositories import (
    GoalRepo,
    OwnershipRepo,
    ProjectRepo,
    TaskRepo,
    TimeEntryRepo,
    TokenRepo,
    UserRepo,
)
from src.taskflow.api.dependencies.services import (
    AuthServiceDep,
    GoalServiceDep,
    OwnershipGuardDep,
    ProjectServiceDep,
    TaskServiceDep,
    TimerServiceDep,
    UserServiceDep,
    get_timer_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentUser",
    "get_current_user",
    # Ownership
    "GoalAccess",
    "ProjectAccess",
    "TaskAccess",
    "TimeEntryAccess",
    "require_ownership",
    # Repositories
    "GoalRepo",
    "OwnershipRepo",
    "ProjectRepo",
    "TaskRepo",
    "TimeEntryRepo",
    "TokenRepo",
    "UserRepo",
    # Services
    "AuthServiceDep",
    "GoalServiceDep",
    "OwnershipGuardDep",
    "ProjectServiceDep",
    "TaskServiceDep",
    "TimerServiceDep",
    "UserServiceDep",
    "get_timer_service",
]
