"""In-transaction domain events raised by the timer engine."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.taskflow.core.logging import get_logger
from src.taskflow.models import TaskStatus
from src.taskflow.models.base import utc_now
from src.taskflow.repositories import TaskRepository

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TimerStarted:
    entry_id: UUID
    task_id: UUID
    user_id: UUID
    started_at: datetime


class TimerStartedHandler(Protocol):
    async def handle(self, event: TimerStarted) -> None: ...


class EventPublisher:
    """Delivers events to handlers in registration order.

    Handlers run inside the publisher's unit of work; a handler that raises
    aborts the whole transition.
    """

    def __init__(self, handlers: list[TimerStartedHandler] | None = None):
        self.handlers = list(handlers or [])

    def subscribe(self, handler: TimerStartedHandler) -> None:
        self.handlers.append(handler)

    async def publish(self, event: TimerStarted) -> None:
        for handler in self.handlers:
            await handler.handle(event)


class StartTaskOnTimerStarted:
    """Moves a task from todo to in_progress when a timer starts on it.

    Tasks already in progress or completed are left untouched.
    """

    def __init__(self, task_repo: TaskRepository):
        self.task_repo = task_repo

    async def handle(self, event: TimerStarted) -> None:
        task = await self.task_repo.get_by_id(event.task_id, for_update=True)
        if task is None or task.status != TaskStatus.TODO.value:
            return

        task.transition_to(TaskStatus.IN_PROGRESS, utc_now())
        logger.info("Task started by timer", task_id=str(task.id), entry_id=str(event.entry_id))
