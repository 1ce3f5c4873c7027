"""Daily wall-clock trigger for the polling job."""

import asyncio
import logging
from datetime import datetime, time, timedelta
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


def next_run_at(now: datetime, at: time) -> datetime:
    """Next occurrence of the time of day `at` strictly after now."""
    target = now.replace(hour=at.hour, minute=at.minute, second=at.second, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return target


class DailyScheduler:
    """Run a job once a day at a fixed local time, never overlapping runs.

    A trigger that fires while the previous run is still in progress is
    skipped. Triggers missed while the process was down are not replayed.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[object]],
        at: time,
        run_immediately: bool = True,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.job = job
        self.at = at
        self.run_immediately = run_immediately
        self.clock = clock
        self.sleep = sleep
        self._current: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._current is not None and not self._current.done()

    def trigger(self) -> Optional[asyncio.Task]:
        """Start the job unless a run is already in progress."""
        if self.running:
            logger.warning("Previous run still in progress, skipping this trigger")
            return None
        self._current = asyncio.create_task(self._run_job())
        return self._current

    async def _run_job(self) -> None:
        started = self.clock()
        try:
            await self.job()
        except Exception:
            logger.exception("Scheduled run failed")
        else:
            logger.info("Run completed in %.1fs", (self.clock() - started).total_seconds())

    async def serve(self) -> None:
        """Trigger forever: optionally now, then daily at the configured time."""
        if self.run_immediately:
            logger.info("Startup run triggered")
            self.trigger()

        # Targets advance one day per trigger; an early wake-up must not fire twice
        target = next_run_at(self.clock(), self.at)
        while True:
            delay = max(0.0, (target - self.clock()).total_seconds())
            logger.info("Next run scheduled at %s (in %.0fs)", target.strftime("%Y-%m-%d %H:%M"), delay)
            await self.sleep(delay)
            target += timedelta(days=1)
            logger.info("Daily trigger fired (%s)", self.at.strftime("%H:%M"))
            self.trigger()

    async def wait(self) -> None:
        """Wait for the in-flight run, if any."""
        if self._current is not None:
            await self._current
