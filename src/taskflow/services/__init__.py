from src.taskflow.services.auth_service import AuthService
from src.taskflow.services.events import EventPublisher, StartTaskOnTimerStarted, TimerStarted
from src.taskflow.services.goal_service import GoalService
from src.taskflow.services.ownership import OwnershipGuard, ResourceType
from src.taskflow.services.project_service import ProjectService
from src.taskflow.services.task_service import TaskService
from src.taskflow.services.timer_service import TimerService
from src.taskflow.services.user_service import UserService

__all__ = [
    "AuthService",
    "EventPublisher",
    "GoalService",
    "OwnershipGuard",
    "ProjectService",
    "ResourceType",
    "StartTaskOnTimerStarted",
    "TaskService",
    "TimerService",
    "TimerStarted",
    "UserService",
]
