"""Tests for the timer event publisher and its task status handler."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.taskflow.models import TaskStatus
from src.taskflow.services import EventPublisher, StartTaskOnTimerStarted, TimerStarted
from tests.factories import TaskFactory
from tests.fakes import InMemoryTasks

pytestmark = pytest.mark.unit


def started(task_id):
    return TimerStarted(
        entry_id=uuid7(), task_id=task_id, user_id=uuid7(), started_at=datetime(2026, 3, 2, 9)
    )


class TestEventPublisher:
    async def test_handlers_run_in_registration_order(self):
        seen = []
        first, second = MagicMock(), MagicMock()
        first.handle = AsyncMock(side_effect=lambda e: seen.append("first"))
        second.handle = AsyncMock(side_effect=lambda e: seen.append("second"))
        publisher = EventPublisher([first])
        publisher.subscribe(second)

        await publisher.publish(started(uuid7()))

        assert seen == ["first", "second"]

    async def test_raising_handler_stops_delivery(self):
        failing, later = MagicMock(), MagicMock()
        failing.handle = AsyncMock(side_effect=ValueError("boom"))
        later.handle = AsyncMock()
        publisher = EventPublisher([failing, later])

        with pytest.raises(ValueError, match="boom"):
            await publisher.publish(started(uuid7()))

        later.handle.assert_not_awaited()

    async def test_no_handlers(self):
        await EventPublisher().publish(started(uuid7()))


class TestStartTaskOnTimerStarted:
    """todo -> in_progress on first timer; other statuses untouched."""

    async def test_todo_task_moves_to_in_progress(self):
        task = TaskFactory.build(project_id=uuid7())
        handler = StartTaskOnTimerStarted(InMemoryTasks(task))

        await handler.handle(started(task.id))

        assert task.status == TaskStatus.IN_PROGRESS.value
        assert task.completed_at is None

    @pytest.mark.parametrize("factory", [TaskFactory.in_progress, TaskFactory.completed])
    async def test_started_or_completed_task_untouched(self, factory):
        task = factory(project_id=uuid7())
        status, completed_at, updated_at = task.status, task.completed_at, task.updated_at
        handler = StartTaskOnTimerStarted(InMemoryTasks(task))

        await handler.handle(started(task.id))

        assert (task.status, task.completed_at, task.updated_at) == (
            status,
            completed_at,
            updated_at,
        )

    async def test_missing_task_is_ignored(self):
        handler = StartTaskOnTimerStarted(InMemoryTasks())

        await handler.handle(started(uuid7()))

    async def test_task_row_is_locked(self):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=None)
        task_id = uuid7()

        await StartTaskOnTimerStarted(repo).handle(started(task_id))

        repo.get_by_id.assert_awaited_once_with(task_id, for_update=True)
