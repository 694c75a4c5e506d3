"""Independent-interval job scheduling with per-resource guards."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

type JobAction = Callable[[], Awaitable[object]]

log = getLogger(__name__)


def following_tick(deadline: float, now: float, interval: float) -> float:
    """The first tick after ``now`` on the grid of ``deadline``.

    Ticks missed while the loop was blocked are dropped, not replayed. A timer that
    fires slightly early still moves on by a whole interval.
    """

    missed = int((now - deadline) // interval)
    return deadline + interval * max(missed + 1, 1)


class JobMode(StrEnum):
    EXCLUSIVE = "exclusive"  # wait for the guard
    ATTEMPT = "attempt"  # skip the tick when the guard is busy


class ResourceGuard:
    """Mutual exclusion for jobs writing the same resource.

    Full jobs wait in ``exclusive()``. Partial jobs use ``attempt()`` and back off
    while the guard is held or a full job is queued for it.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = asyncio.Lock()
        self._waiting = 0

    @property
    def busy(self) -> bool:
        return self._lock.locked() or self._waiting > 0

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[None]:
        self._waiting += 1
        try:
            await self._lock.acquire()
        finally:
            self._waiting -= 1
        try:
            yield
        finally:
            self._lock.release()

    @asynccontextmanager
    async def attempt(self) -> AsyncIterator[bool]:
        if self.busy:
            yield False
            return
        await self._lock.acquire()
        try:
            yield True
        finally:
            self._lock.release()


@dataclass(frozen=True, slots=True)
class ScheduledJob:
    name: str
    interval: timedelta
    action: JobAction
    guard: ResourceGuard | None = None
    mode: JobMode = JobMode.EXCLUSIVE

    def __post_init__(self) -> None:
        if self.interval <= timedelta(0):
            raise ValueError(f"Job {self.name} needs a positive interval, got {self.interval}")


class ReconciliationScheduler:
    """Run every job on its own timer; a job never overlaps with itself."""

    def __init__(
        self,
        jobs: Iterable[ScheduledJob],
        *,
        startup_delay: timedelta = timedelta(seconds=5),
    ) -> None:
        self._jobs = {job.name: job for job in jobs}
        self._startup_delay = startup_delay
        self._running: set[str] = set()

    @property
    def job_names(self) -> tuple[str, ...]:
        return tuple(self._jobs)

    async def run_job(self, name: str) -> bool:
        """Run one tick of ``name``; ``False`` when the tick was skipped.

        Errors raised by the job propagate to the caller.
        """

        try:
            job = self._jobs[name]
        except KeyError:
            raise ValueError(f"Unknown job {name!r}") from None
        if name in self._running:
            log.debug("Skipping %s: previous run still in flight", name)
            return False
        self._running.add(name)
        try:
            return await self._execute(job)
        finally:
            self._running.discard(name)

    async def run_forever(self) -> None:
        log.info(
            "Starting scheduler with jobs: %s",
            ", ".join(f"{job.name}/{job.interval}" for job in self._jobs.values()),
        )
        async with asyncio.TaskGroup() as group:
            for job in self._jobs.values():
                group.create_task(self._run_timer(job), name=f"timer:{job.name}")

    async def _execute(self, job: ScheduledJob) -> bool:
        if job.guard is None:
            await job.action()
            return True
        if job.mode is JobMode.EXCLUSIVE:
            async with job.guard.exclusive():
                await job.action()
            return True
        async with job.guard.attempt() as acquired:
            if not acquired:
                log.debug("Skipping %s: %s is busy", job.name, job.guard.name)
                return False
            await job.action()
        return True

    async def _tick(self, job: ScheduledJob) -> None:
        log.debug("Tick %s", job.name)
        try:
            await self.run_job(job.name)
        except Exception:
            log.exception("Job %s failed; retrying on the next tick", job.name)

    async def _run_timer(self, job: ScheduledJob) -> None:
        loop = asyncio.get_running_loop()
        interval = job.interval.total_seconds()
        next_tick = loop.time() + self._startup_delay.total_seconds()
        in_flight: asyncio.Task[None] | None = None
        try:
            while True:
                await asyncio.sleep(max(next_tick - loop.time(), 0.0))
                next_tick = following_tick(next_tick, loop.time(), interval)
                if in_flight is not None and not in_flight.done():
                    log.debug("Skipping %s tick: previous run still in flight", job.name)
                    continue
                in_flight = asyncio.create_task(self._tick(job), name=f"job:{job.name}")
        finally:
            if in_flight is not None and not in_flight.done():
                in_flight.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await in_flight
