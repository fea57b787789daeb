"""Tests for request-scoped structured logging context."""

from uuid import uuid7

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.taskflow.core.logging import (
    bind_request_context,
    bind_user_context,
    clear_request_context,
    get_logger,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Route structlog output into a CapturingLogger for the test."""
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )
    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


def test_request_id_is_bound(capturing_logger):
    bind_request_context("req-123")

    get_logger(__name__).info("Timer started")

    assert capturing_logger.calls[0].kwargs["request_id"] == "req-123"


def test_missing_request_id_is_not_bound(capturing_logger):
    bind_request_context(None)

    get_logger(__name__).info("Timer started")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_user_id_is_bound_as_string(capturing_logger):
    user_id = uuid7()
    bind_user_context(user_id)

    get_logger(__name__).info("Timer stopped")

    assert capturing_logger.calls[0].kwargs["user_id"] == str(user_id)


def test_context_accumulates_and_clears(capturing_logger):
    user_id = uuid7()
    bind_request_context("req-456")
    bind_user_context(user_id)
    logger = get_logger(__name__)

    logger.info("first")
    clear_request_context()
    logger.info("second")

    first, second = capturing_logger.calls
    assert first.kwargs["request_id"] == "req-456"
    assert first.kwargs["user_id"] == str(user_id)
    assert "request_id" not in second.kwargs
    assert "user_id" not in second.kwargs


async def test_owner_mismatch_is_logged_as_warning(capturing_logger):
    from unittest.mock import AsyncMock, MagicMock

    from src.taskflow.services import OwnershipGuard, ResourceType

    repo = MagicMock()
    repo.time_entry_owners = AsyncMock(return_value=(uuid7(), uuid7()))
    entry_id = uuid7()

    await OwnershipGuard(repo).check(ResourceType.TIME_ENTRY, entry_id, uuid7())

    call = capturing_logger.calls[0]
    assert call.method_name == "warning"
    assert call.args == ("Time entry owner mismatch",)
    assert call.kwargs["time_entry_id"] == str(entry_id)


def test_method_and_path_are_bound_together(capturing_logger):
    bind_request_context("req-789", "POST", "/api/v1/time/start")

    get_logger(__name__).info("Timer started")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["path"] == "/api/v1/time/start"
