"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskflow.api.dependencies.db import DBSession
from src.taskflow.api.dependencies.repositories import (
    GoalRepo,
    OwnershipRepo,
    ProjectRepo,
    TaskRepo,
    TimeEntryRepo,
    TokenRepo,
    UserRepo,
)
from src.taskflow.core.metrics import get_timer_metrics
from src.taskflow.services import (
    AuthService,
    EventPublisher,
    GoalService,
    OwnershipGuard,
    ProjectService,
    StartTaskOnTimerStarted,
    TaskService,
    TimerService,
    UserService,
)


def get_ownership_guard(ownership_repo: OwnershipRepo) -> OwnershipGuard:
    return OwnershipGuard(ownership_repo)


OwnershipGuardDep = Annotated[OwnershipGuard, Depends(get_ownership_guard)]


def get_auth_service(
    user_repo: UserRepo, token_repo: TokenRepo, session: DBSession
) -> AuthService:
    return AuthService(user_repo, token_repo, session)


def get_user_service(session: DBSession) -> UserService:
    return UserService(session)


def get_project_service(project_repo: ProjectRepo, session: DBSession) -> ProjectService:
    return ProjectService(project_repo, session)


def get_task_service(
    task_repo: TaskRepo, guard: OwnershipGuardDep, session: DBSession
) -> TaskService:
    return TaskService(task_repo, guard, session)


def get_goal_service(goal_repo: GoalRepo, session: DBSession) -> GoalService:
    return GoalService(goal_repo, session)


def get_timer_service(
    session: DBSession,
    guard: OwnershipGuardDep,
    user_repo: UserRepo,
    entry_repo: TimeEntryRepo,
    task_repo: TaskRepo,
) -> TimerService:
    """Timer engine wired with the task-status handler and process metrics."""
    events = EventPublisher([StartTaskOnTimerStarted(task_repo)])
    return TimerService(
        session,
        guard,
        user_repo,
        entry_repo,
        events,
        get_timer_metrics(),
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
GoalServiceDep = Annotated[GoalService, Depends(get_goal_service)]
TimerServiceDep = Annotated[TimerService, Depends(get_timer_service)]
