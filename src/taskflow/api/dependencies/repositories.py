"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskflow.api.dependencies.db import DBSession
from src.taskflow.repositories import (
    GoalRepository,
    OwnershipRepository,
    ProjectRepository,
    RefreshTokenRepository,
    TaskRepository,
    TimeEntryRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_token_repository(session: DBSession) -> RefreshTokenRepository:
    return RefreshTokenRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_time_entry_repository(session: DBSession) -> TimeEntryRepository:
    return TimeEntryRepository(session)


def get_goal_repository(session: DBSession) -> GoalRepository:
    return GoalRepository(session)


def get_ownership_repository(session: DBSession) -> OwnershipRepository:
    return OwnershipRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TokenRepo = Annotated[RefreshTokenRepository, Depends(get_token_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
TimeEntryRepo = Annotated[TimeEntryRepository, Depends(get_time_entry_repository)]
GoalRepo = Annotated[GoalRepository, Depends(get_goal_repository)]
OwnershipRepo = Annotated[OwnershipRepository, Depends(get_ownership_repository)]
