"""Timer lifecycle engine.

Owns the single-running-timer rule, duration arithmetic and the side effect
of starting a timer on a task that has not been started yet.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core.exceptions import InternalError
from src.taskflow.core.logging import get_logger
from src.taskflow.core.metrics import TimerMetrics
from src.taskflow.models import SummaryPeriod, TimeEntry
from src.taskflow.models.base import to_utc_naive, utc_now
from src.taskflow.repositories import (
    ActiveTimerRow,
    SummaryRow,
    TimeEntryRepository,
    UserRepository,
)
from src.taskflow.services.events import EventPublisher, TimerStarted
from src.taskflow.services.outcomes import (
    Allowed,
    ConflictActiveTimer,
    Deleted,
    Forbidden,
    InvalidTimeRange,
    NoActiveTimer,
    NotFound,
)
from src.taskflow.services.ownership import OwnershipGuard, ResourceType

logger = get_logger(__name__)

ONE_OPEN_ENTRY_INDEX = "uq_time_entries_one_open_per_user"


def elapsed_seconds(start: datetime, end: datetime) -> int | None:
    """Whole seconds from ``start`` to ``end``, floored.

    Returns None when ``end`` is before ``start``.
    """
    delta = end - start
    if delta < timedelta(0):
        return None
    return delta // timedelta(seconds=1)


def period_start(period: SummaryPeriod, now: datetime) -> datetime:
    """Start of a summary window: midnight UTC today, or 7 / 30 days back."""
    match period:
        case SummaryPeriod.TODAY:
            return now.replace(hour=0, minute=0, second=0, microsecond=0)
        case SummaryPeriod.WEEK:
            return now - timedelta(days=7)
        case SummaryPeriod.MONTH:
            return now - timedelta(days=30)


def _is_open_entry_violation(exc: IntegrityError) -> bool:
    return ONE_OPEN_ENTRY_INDEX in str(exc.orig)


class TimerService:
    """Start, stop and edit time entries for one request's unit of work.

    Every transition commits or rolls back as a whole. Rejections come back
    as outcome values; storage failures are raised as ``InternalError`` after
    rollback.
    """

    def __init__(
        self,
        session: AsyncSession,
        guard: OwnershipGuard,
        user_repo: UserRepository,
        entry_repo: TimeEntryRepository,
        events: EventPublisher,
        metrics: TimerMetrics,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session = session
        self.guard = guard
        self.user_repo = user_repo
        self.entry_repo = entry_repo
        self.events = events
        self.metrics = metrics
        self.clock = clock

    async def start_timer(
        self,
        user_id: UUID,
        task_id: UUID,
        start_time: datetime | None = None,
        description: str | None = None,
    ) -> TimeEntry | ConflictActiveTimer | NotFound | Forbidden:
        access = await self.guard.check(ResourceType.TASK, task_id, user_id)
        if not isinstance(access, Allowed):
            self.metrics.record_transition("start", access.label)
            logger.info("Timer start rejected", task_id=str(task_id), reason=access.label)
            return access

        started_at = to_utc_naive(start_time) if start_time else self.clock()

        try:
            await self.user_repo.lock(user_id)

            active = await self.entry_repo.get_open_for_user(user_id)
            if active is not None:
                active_id = active.id
                await self.session.rollback()
                self.metrics.record_transition("start", ConflictActiveTimer.label)
                logger.info(
                    "Timer start rejected",
                    task_id=str(task_id),
                    reason=ConflictActiveTimer.label,
                    active_entry_id=str(active_id),
                )
                return ConflictActiveTimer(active_entry_id=active_id)

            entry = TimeEntry(
                task_id=task_id,
                user_id=user_id,
                start_time=started_at,
                description=description,
            )
            self.entry_repo.add(entry)
            await self.session.flush()

            await self.events.publish(
                TimerStarted(
                    entry_id=entry.id,
                    task_id=task_id,
                    user_id=user_id,
                    started_at=started_at,
                )
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if not _is_open_entry_violation(e):
                self.metrics.record_transition("start", "error")
                raise InternalError("timer.start") from e
            return await self._lost_race("start", user_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.metrics.record_transition("start", "error")
            raise InternalError("timer.start") from e
        except Exception:
            await self.session.rollback()
            self.metrics.record_transition("start", "error")
            raise

        self.metrics.record_transition("start", "started")
        logger.info("Timer started", entry_id=str(entry.id), task_id=str(task_id))
        return entry

    async def _lost_race(self, transition: str, user_id: UUID) -> ConflictActiveTimer:
        """Resolve a unique-index violation to the entry that won the race."""
        try:
            winner = await self.entry_repo.get_open_for_user(user_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError(f"timer.{transition}") from e

        self.metrics.record_transition(transition, ConflictActiveTimer.label)
        logger.info(
            "Concurrent timer won",
            transition=transition,
            active_entry_id=str(winner.id) if winner else None,
        )
        return ConflictActiveTimer(active_entry_id=winner.id if winner else None)

    async def stop_timer(
        self, user_id: UUID, end_time: datetime | None = None
    ) -> TimeEntry | NoActiveTimer | InvalidTimeRange:
        try:
            entry = await self.entry_repo.get_open_for_user(user_id, for_update=True)
            if entry is None:
                await self.session.rollback()
                self.metrics.record_transition("stop", NoActiveTimer.label)
                return NoActiveTimer()

            ended_at = to_utc_naive(end_time) if end_time else self.clock()
            duration = elapsed_seconds(entry.start_time, ended_at)
            if duration is None:
                entry_id = entry.id
                await self.session.rollback()
                self.metrics.record_transition("stop", InvalidTimeRange.label)
                logger.info("Timer stop rejected", entry_id=str(entry_id), reason="negative_range")
                return InvalidTimeRange()

            entry.end_time = ended_at
            entry.duration = duration
            entry.updated_at = self.clock()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.metrics.record_transition("stop", "error")
            raise InternalError("timer.stop") from e

        self.metrics.record_transition("stop", "stopped")
        self.metrics.observe_duration(duration)
        logger.info("Timer stopped", entry_id=str(entry.id), duration=duration)
        return entry

    async def edit_time_entry(
        self, entry_id: UUID, changes: dict
    ) -> TimeEntry | NotFound | InvalidTimeRange | ConflictActiveTimer:
        """Apply a partial edit.

        Only keys present in ``changes`` are applied; a present ``None``
        clears the field. Duration always follows the resulting start/end
        pair. Clearing ``end_time`` re-opens the entry, which is refused when
        the user already has a different running timer.
        """
        try:
            entry = await self.entry_repo.get_by_id(entry_id, for_update=True)
            if entry is None:
                await self.session.rollback()
                self.metrics.record_transition("edit", NotFound.label)
                return NotFound()
            owner_id = entry.user_id

            if "start_time" in changes and changes["start_time"] is None:
                await self.session.rollback()
                self.metrics.record_transition("edit", InvalidTimeRange.label)
                return InvalidTimeRange(detail="start_time cannot be cleared")

            start = (
                to_utc_naive(changes["start_time"]) if "start_time" in changes else entry.start_time
            )
            if "end_time" in changes:
                end = to_utc_naive(changes["end_time"]) if changes["end_time"] else None
            else:
                end = entry.end_time

            duration = None
            if end is not None:
                duration = elapsed_seconds(start, end)
                if duration is None:
                    await self.session.rollback()
                    self.metrics.record_transition("edit", InvalidTimeRange.label)
                    return InvalidTimeRange()
            elif entry.end_time is not None:
                other = await self.entry_repo.get_other_open_for_user(entry.user_id, entry.id)
                if other is not None:
                    other_id = other.id
                    await self.session.rollback()
                    self.metrics.record_transition("edit", ConflictActiveTimer.label)
                    return ConflictActiveTimer(active_entry_id=other_id)

            entry.start_time = start
            entry.end_time = end
            entry.duration = duration
            if "description" in changes:
                entry.description = changes["description"]
            entry.updated_at = self.clock()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if not _is_open_entry_violation(e):
                self.metrics.record_transition("edit", "error")
                raise InternalError("timer.edit") from e
            return await self._lost_race("edit", owner_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.metrics.record_transition("edit", "error")
            raise InternalError("timer.edit") from e

        self.metrics.record_transition("edit", "edited")
        logger.info("Time entry edited", entry_id=str(entry_id), fields=sorted(changes))
        return entry

    async def delete_time_entry(self, entry_id: UUID) -> Deleted | NotFound:
        """Delete an entry. The task's status is left as it is."""
        try:
            entry = await self.entry_repo.get_by_id(entry_id)
            if entry is None:
                await self.session.rollback()
                self.metrics.record_transition("delete", NotFound.label)
                return NotFound()

            await self.entry_repo.delete(entry)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.metrics.record_transition("delete", "error")
            raise InternalError("timer.delete") from e

        self.metrics.record_transition("delete", Deleted.label)
        logger.info("Time entry deleted", entry_id=str(entry_id))
        return Deleted()

    async def get_active_timer(self, user_id: UUID) -> ActiveTimerRow | None:
        try:
            return await self.entry_repo.get_active_with_context(user_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("timer.active") from e

    async def create_manual_entry(
        self,
        user_id: UUID,
        task_id: UUID,
        duration_minutes: int,
        start_time: datetime | None = None,
        description: str | None = None,
    ) -> TimeEntry | NotFound | Forbidden:
        """Record already-finished work as a closed entry.

        Without ``start_time`` the entry ends now. The task's status is not
        touched.
        """
        access = await self.guard.check(ResourceType.TASK, task_id, user_id)
        if not isinstance(access, Allowed):
            self.metrics.record_transition("manual", access.label)
            return access

        span = timedelta(minutes=duration_minutes)
        if start_time:
            started_at = to_utc_naive(start_time)
            ended_at = started_at + span
        else:
            ended_at = self.clock()
            started_at = ended_at - span

        entry = TimeEntry(
            task_id=task_id,
            user_id=user_id,
            start_time=started_at,
            end_time=ended_at,
            duration=duration_minutes * 60,
            description=description,
        )
        try:
            self.entry_repo.add(entry)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.metrics.record_transition("manual", "error")
            raise InternalError("timer.manual") from e

        self.metrics.record_transition("manual", "created")
        logger.info("Manual time entry created", entry_id=str(entry.id), task_id=str(task_id))
        return entry

    async def list_task_entries(
        self, task_id: UUID, cursor: str | None = None, limit: int = 100
    ) -> tuple[list[TimeEntry], str | None, bool]:
        try:
            return await self.entry_repo.list_for_task(task_id, cursor, limit)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("timer.list") from e

    async def summarize(
        self, user_id: UUID, period: SummaryPeriod
    ) -> tuple[datetime, list[SummaryRow], int]:
        """Per-task totals of closed entries in the period.

        Returns:
            Tuple of (period start, rows by total desc, overall seconds)
        """
        since = period_start(period, self.clock())
        try:
            rows = await self.entry_repo.summarize_since(user_id, since)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("timer.summary") from e
        return since, rows, sum(row.total_seconds for row in rows)
