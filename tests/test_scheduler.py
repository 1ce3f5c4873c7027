"""Tests for the daily scheduler."""

import asyncio
from datetime import datetime, time, timedelta

import pytest

from release_watcher.scheduler import DailyScheduler, next_run_at


def test_next_run_later_today() -> None:
    assert next_run_at(datetime(2024, 1, 1, 7, 0, 0), time(8, 0)) == datetime(2024, 1, 1, 8, 0)


def test_next_run_tomorrow() -> None:
    assert next_run_at(datetime(2024, 1, 1, 9, 0, 0), time(8, 0)) == datetime(2024, 1, 2, 8, 0)


def test_exact_trigger_time_schedules_next_day() -> None:
    assert next_run_at(datetime(2024, 1, 1, 8, 0, 0), time(8, 0)) == datetime(2024, 1, 2, 8, 0)


@pytest.mark.asyncio
async def test_overlapping_trigger_skipped() -> None:
    started = 0
    release = asyncio.Event()

    async def job() -> None:
        nonlocal started
        started += 1
        await release.wait()

    scheduler = DailyScheduler(job, at=time(8, 0))

    first = scheduler.trigger()
    await asyncio.sleep(0)
    second = scheduler.trigger()

    assert first is not None
    assert second is None
    assert scheduler.running

    release.set()
    await scheduler.wait()
    assert started == 1
    assert not scheduler.running

    # A new trigger after completion runs again
    scheduler.trigger()
    await scheduler.wait()
    assert started == 2


@pytest.mark.asyncio
async def test_failing_job_does_not_break_scheduler() -> None:
    async def job() -> None:
        raise RuntimeError("boom")

    scheduler = DailyScheduler(job, at=time(8, 0))

    scheduler.trigger()
    await scheduler.wait()

    assert not scheduler.running


@pytest.mark.asyncio
async def test_serve_runs_immediately() -> None:
    ran = asyncio.Event()

    async def job() -> None:
        ran.set()

    scheduler = DailyScheduler(job, at=time(8, 0), clock=lambda: datetime(2024, 1, 1, 9, 0))
    serve_task = asyncio.create_task(scheduler.serve())

    await asyncio.wait_for(ran.wait(), timeout=1)

    serve_task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await serve_task


class StopServing(Exception):
    pass


@pytest.mark.asyncio
async def test_early_wakeup_does_not_fire_twice() -> None:
    """Test that waking just before the trigger time schedules the next day."""
    early = datetime(2024, 1, 1, 7, 59, 59, 995000)
    delays: list[float] = []

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)
        if len(delays) == 2:
            raise StopServing

    async def job() -> None:
        pass

    # The clock never reaches 08:00, as if sleep woke a few ms early
    scheduler = DailyScheduler(
        job, at=time(8, 0), run_immediately=False, clock=lambda: early, sleep=fake_sleep,
    )

    with pytest.raises(StopServing):
        await scheduler.serve()
    await scheduler.wait()

    assert delays[0] == pytest.approx(0.005)
    expected = (datetime(2024, 1, 2, 8, 0) - early).total_seconds()
    assert delays[1] == pytest.approx(expected)
    assert delays[1] > timedelta(hours=23).total_seconds()
