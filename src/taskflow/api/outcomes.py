"""Translate service outcomes into HTTP errors."""

from typing import NoReturn

from fastapi import HTTPException, status

from src.taskflow.core.exceptions import HTTPErrorWithFields
from src.taskflow.services.outcomes import (
    ConflictActiveTimer,
    Forbidden,
    InvalidTimeRange,
    NoActiveTimer,
    NotFound,
)

type Rejection = NotFound | Forbidden | ConflictActiveTimer | NoActiveTimer | InvalidTimeRange


def http_error_for(outcome: Rejection, resource: str = "resource") -> HTTPException:
    """The HTTP error a rejected outcome maps to.

    NotFound -> 404, Forbidden -> 403, ConflictActiveTimer -> 409 (the detail
    carries ``active_entry_id``), NoActiveTimer -> 404, InvalidTimeRange -> 400.
    """
    name = resource.replace("_", " ").capitalize()
    match outcome:
        case NotFound():
            return HTTPException(status.HTTP_404_NOT_FOUND, detail=f"{name} not found")
        case Forbidden():
            return HTTPException(
                status.HTTP_403_FORBIDDEN, detail=f"{name} belongs to another user"
            )
        case ConflictActiveTimer(active_entry_id=active_entry_id):
            return HTTPErrorWithFields(
                status.HTTP_409_CONFLICT,
                detail="A timer is already running",
                fields={"active_entry_id": str(active_entry_id) if active_entry_id else None},
            )
        case NoActiveTimer():
            return HTTPException(status.HTTP_404_NOT_FOUND, detail="No active timer")
        case InvalidTimeRange(detail=detail):
            return HTTPException(status.HTTP_400_BAD_REQUEST, detail=detail)
    raise TypeError(f"Not a rejection outcome: {outcome!r}")


def raise_for_outcome(outcome: Rejection, resource: str = "resource") -> NoReturn:
    raise http_error_for(outcome, resource)
