"""Test factories for generating test data.

    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.auth import RefreshTokenFactory
from tests.factories.base import BaseFactory, generate_uuid7, utc_now
from tests.factories.tracking import (
    GoalFactory,
    ProjectFactory,
    TaskFactory,
    TimeEntryFactory,
)
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid7",
    "utc_now",
    # User
    "DEFAULT_TEST_PASSWORD",
    "UserFactory",
    # Auth
    "RefreshTokenFactory",
    # Tracking
    "GoalFactory",
    "ProjectFactory",
    "TaskFactory",
    "TimeEntryFactory",
]
