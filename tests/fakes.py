"""In-memory stand-ins for the timer engine's collaborators."""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

from src.taskflow.core.metrics import NullTimerMetrics
from src.taskflow.models import Task, TimeEntry
from src.taskflow.services import EventPublisher, StartTaskOnTimerStarted, TimerService
from src.taskflow.services.outcomes import Allowed, Forbidden, NotFound


class InMemoryTimeEntries:
    """TimeEntryRepository over a dict, committed or not."""

    def __init__(self) -> None:
        self.rows: dict[UUID, TimeEntry] = {}

    def add(self, entry: TimeEntry) -> None:
        self.rows[entry.id] = entry

    async def get_by_id(self, id: UUID, for_update: bool = False) -> TimeEntry | None:
        return self.rows.get(id)

    async def get_open_for_user(self, user_id: UUID, for_update: bool = False) -> TimeEntry | None:
        for entry in self.rows.values():
            if entry.user_id == user_id and entry.end_time is None:
                return entry
        return None

    async def get_other_open_for_user(self, user_id: UUID, exclude_id: UUID) -> TimeEntry | None:
        for entry in self.rows.values():
            if entry.user_id == user_id and entry.end_time is None and entry.id != exclude_id:
                return entry
        return None

    async def delete(self, entry: TimeEntry) -> None:
        self.rows.pop(entry.id, None)

    def open_entries(self, user_id: UUID) -> list[TimeEntry]:
        return [e for e in self.rows.values() if e.user_id == user_id and e.end_time is None]


class InMemoryTasks:
    def __init__(self, *tasks: Task) -> None:
        self.rows = {t.id: t for t in tasks}

    async def get_by_id(self, id: UUID, for_update: bool = False) -> Task | None:
        return self.rows.get(id)


class StaticGuard:
    """Ownership guard over a fixed task -> owner map."""

    def __init__(self, owners: dict[UUID, UUID]) -> None:
        self.owners = owners

    async def check(self, resource_type, resource_id: UUID, acting_user_id: UUID):
        owner = self.owners.get(resource_id)
        if owner is None:
            return NotFound()
        if owner != acting_user_id:
            return Forbidden()
        return Allowed(owner_id=owner)


def build_timer_service(
    owners: dict[UUID, UUID],
    *tasks: Task,
    clock=None,
    metrics=None,
) -> tuple[TimerService, InMemoryTimeEntries, AsyncMock]:
    """TimerService wired to in-memory collaborators.

    Returns:
        Tuple of (service, entries, session mock)
    """
    session = AsyncMock()
    entries = InMemoryTimeEntries()
    user_repo = MagicMock()
    user_repo.lock = AsyncMock()
    events = EventPublisher([StartTaskOnTimerStarted(InMemoryTasks(*tasks))])  # type: ignore[arg-type]
    kwargs = {"clock": clock} if clock else {}
    service = TimerService(
        session,
        StaticGuard(owners),  # type: ignore[arg-type]
        user_repo,
        entries,  # type: ignore[arg-type]
        events,
        metrics or NullTimerMetrics(),
        **kwargs,
    )
    return service, entries, session
