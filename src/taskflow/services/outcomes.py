"""Domain outcomes returned by services.

Rejections are ordinary values, not exceptions: callers branch on the type.
Only storage failures are raised (``InternalError``).
"""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Allowed:
    label: ClassVar[str] = "allowed"

    owner_id: UUID


@dataclass(frozen=True, slots=True)
class NotFound:
    label: ClassVar[str] = "not_found"


@dataclass(frozen=True, slots=True)
class Forbidden:
    label: ClassVar[str] = "forbidden"


@dataclass(frozen=True, slots=True)
class ConflictActiveTimer:
    """The user already has a running timer.

    ``active_entry_id`` is None only when the competing entry was stopped
    again before it could be looked up.
    """

    label: ClassVar[str] = "conflict"

    active_entry_id: UUID | None


@dataclass(frozen=True, slots=True)
class NoActiveTimer:
    label: ClassVar[str] = "no_active_timer"


@dataclass(frozen=True, slots=True)
class InvalidTimeRange:
    label: ClassVar[str] = "invalid_time_range"

    detail: str = "end_time must not be before start_time"


@dataclass(frozen=True, slots=True)
class Deleted:
    label: ClassVar[str] = "deleted"


type Access = Allowed | NotFound | Forbidden
