"""Model exports.

Import from here: `from src.taskflow.models import Task, TimeEntry`
"""

from src.taskflow.models.auth import RefreshToken
from src.taskflow.models.enums import GoalType, GoalUnit, SummaryPeriod, TaskPriority, TaskStatus
from src.taskflow.models.goal import Goal
from src.taskflow.models.project import DEFAULT_PROJECT_COLOR, Project
from src.taskflow.models.task import Task
from src.taskflow.models.time_entry import TimeEntry
from src.taskflow.models.user import User

__all__ = [
    # Enums
    "GoalType",
    "GoalUnit",
    "SummaryPeriod",
    "TaskPriority",
    "TaskStatus",
    # Models
    "DEFAULT_PROJECT_COLOR",
    "Goal",
    "Project",
    "RefreshToken",
    "Task",
    "TimeEntry",
    "User",
]
