"""Tests for OwnershipGuard resolution along the ownership chain."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest
from sqlalchemy.exc import OperationalError

from src.taskflow.core.exceptions import InternalError
from src.taskflow.services import OwnershipGuard, ResourceType
from src.taskflow.services.outcomes import Allowed, Forbidden, NotFound

pytestmark = pytest.mark.unit


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.project_owner = AsyncMock(return_value=None)
    repo.task_owner = AsyncMock(return_value=None)
    repo.time_entry_owners = AsyncMock(return_value=None)
    repo.goal_owner = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def guard(repo):
    return OwnershipGuard(repo)


LOOKUPS = [
    (ResourceType.PROJECT, "project_owner"),
    (ResourceType.TASK, "task_owner"),
    (ResourceType.GOAL, "goal_owner"),
]


class TestDirectOwnership:
    """Projects, tasks and goals resolve to one owner."""

    @pytest.mark.parametrize(("resource_type", "lookup"), LOOKUPS)
    async def test_owner_is_allowed(self, guard, repo, resource_type, lookup):
        owner = uuid7()
        resource_id = uuid7()
        getattr(repo, lookup).return_value = owner

        result = await guard.check(resource_type, resource_id, owner)

        assert result == Allowed(owner_id=owner)
        getattr(repo, lookup).assert_awaited_once_with(resource_id)

    @pytest.mark.parametrize(("resource_type", "lookup"), LOOKUPS)
    async def test_other_user_is_forbidden(self, guard, repo, resource_type, lookup):
        getattr(repo, lookup).return_value = uuid7()

        result = await guard.check(resource_type, uuid7(), uuid7())

        assert isinstance(result, Forbidden)

    @pytest.mark.parametrize(("resource_type", "lookup"), LOOKUPS)
    async def test_missing_resource_is_not_found(self, guard, resource_type, lookup):
        result = await guard.check(resource_type, uuid7(), uuid7())

        assert isinstance(result, NotFound)


class TestTimeEntryOwnership:
    """Time entries are authorized through task -> project -> user."""

    async def test_chain_owner_is_allowed(self, guard, repo):
        owner = uuid7()
        repo.time_entry_owners.return_value = (owner, owner)

        assert await guard.check(ResourceType.TIME_ENTRY, uuid7(), owner) == Allowed(
            owner_id=owner
        )

    async def test_other_user_is_forbidden(self, guard, repo):
        owner = uuid7()
        repo.time_entry_owners.return_value = (owner, owner)

        result = await guard.check(ResourceType.TIME_ENTRY, uuid7(), uuid7())

        assert isinstance(result, Forbidden)

    async def test_missing_entry_is_not_found(self, guard):
        result = await guard.check(ResourceType.TIME_ENTRY, uuid7(), uuid7())

        assert isinstance(result, NotFound)

    async def test_cached_owner_mismatch_is_forbidden_even_for_chain_owner(self, guard, repo):
        chain_owner, cached_owner = uuid7(), uuid7()
        repo.time_entry_owners.return_value = (chain_owner, cached_owner)

        assert isinstance(
            await guard.check(ResourceType.TIME_ENTRY, uuid7(), chain_owner), Forbidden
        )
        assert isinstance(
            await guard.check(ResourceType.TIME_ENTRY, uuid7(), cached_owner), Forbidden
        )


class TestGuardFailures:
    async def test_storage_error_is_internal(self, guard, repo):
        repo.task_owner.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(InternalError) as exc_info:
            await guard.check(ResourceType.TASK, uuid7(), uuid7())

        assert exc_info.value.operation == "ownership.task"

    async def test_time_entry_storage_error_is_internal(self, guard, repo):
        repo.time_entry_owners.side_effect = OperationalError("SELECT", {}, None)

        with pytest.raises(InternalError):
            await guard.check(ResourceType.TIME_ENTRY, uuid7(), uuid7())
