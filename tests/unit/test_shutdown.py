"""Tests for in-flight request tracking during shutdown."""

import asyncio
import contextlib

import pytest

from src.taskflow.core.shutdown import RequestTracker

pytestmark = pytest.mark.unit


@pytest.fixture
def tracker() -> RequestTracker:
    return RequestTracker()


async def hold(tracker: RequestTracker, release: asyncio.Event) -> None:
    async with tracker.track_request():
        await release.wait()


class TestRequestTracker:
    async def test_counts_nested_blocks(self, tracker):
        async with tracker.track_request():
            async with tracker.track_request():
                assert tracker.in_flight_count == 2
            assert tracker.in_flight_count == 1
        assert tracker.in_flight_count == 0

    async def test_count_drops_when_block_raises(self, tracker):
        with pytest.raises(RuntimeError):
            async with tracker.track_request():
                raise RuntimeError("request failed")

        assert tracker.in_flight_count == 0

    async def test_idle_tracker_drains_immediately(self, tracker):
        await tracker.start_shutdown()

        assert tracker.is_shutting_down
        assert await tracker.wait_for_drain(timeout=0.1) is True

    async def test_drain_waits_for_open_requests(self, tracker):
        release = asyncio.Event()
        requests = [asyncio.create_task(hold(tracker, release)) for _ in range(3)]
        await asyncio.sleep(0)
        assert tracker.in_flight_count == 3

        await tracker.start_shutdown()
        waiter = asyncio.create_task(tracker.wait_for_drain(timeout=1.0))
        await asyncio.sleep(0.01)
        assert not waiter.done()

        release.set()
        assert await waiter is True
        await asyncio.gather(*requests)

    async def test_drain_times_out(self, tracker):
        release = asyncio.Event()
        request = asyncio.create_task(hold(tracker, release))
        await asyncio.sleep(0)

        await tracker.start_shutdown()

        assert await tracker.wait_for_drain(timeout=0.05) is False
        assert tracker.in_flight_count == 1
        request.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await request

    async def test_reset(self, tracker):
        await tracker.start_shutdown()

        tracker.reset()

        assert not tracker.is_shutting_down
        assert tracker.in_flight_count == 0
