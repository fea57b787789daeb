"""Repository layer - data access abstraction."""

from src.taskflow.repositories.base import BaseRepository
from src.taskflow.repositories.goal import GoalRepository
from src.taskflow.repositories.ownership import OwnershipRepository
from src.taskflow.repositories.project import ProjectRepository
from src.taskflow.repositories.task import TaskRepository
from src.taskflow.repositories.time_entry import (
    ActiveTimerRow,
    SummaryRow,
    TimeEntryRepository,
)
from src.taskflow.repositories.token import RefreshTokenRepository
from src.taskflow.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    # Repositories
    "GoalRepository",
    "OwnershipRepository",
    "ProjectRepository",
    "RefreshTokenRepository",
    "TaskRepository",
    "TimeEntryRepository",
    "UserRepository",
    # Row types
    "ActiveTimerRow",
    "SummaryRow",
]
