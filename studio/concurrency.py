"""
Concurrency Module
===================
Scheduling primitives for the simulated conversion drivers.

Everything runs on one asyncio event loop. Drivers suspend only inside
``Scheduler.sleep``; cancellation is cooperative through tokens that each
driver checks before it writes.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Coroutine, Optional, Protocol

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Token for cooperative task cancellation.

    Drivers check is_cancelled() before each state write and exit quietly.
    """

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    def is_cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._cancelled


class Scheduler(Protocol):
    """Clock abstraction used by drivers and the playback loop."""

    def now(self) -> float:
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class AsyncioScheduler:
    """Wall-clock scheduler backed by asyncio timers."""

    def now(self) -> float:
        return asyncio.get_running_loop().time()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class VirtualScheduler:
    """
    Deterministic scheduler for tests.

    ``sleep`` parks the caller until ``advance`` moves the virtual clock past
    its deadline. Sleepers wake in deadline order (FIFO on ties) and each
    woken task gets a chance to run up to its next wait before the next one
    is released.

    Example:
        scheduler = VirtualScheduler()
        controller = StudioController(scheduler=scheduler)
        job_id = controller.start_job(doc.id)
        await scheduler.advance(20.0)
    """

    # Loop turns given to woken tasks before releasing the next sleeper
    SETTLE_TURNS = 5

    def __init__(self, start: float = 0.0):
        self._now = start
        self._sleepers: list[tuple[float, int, asyncio.Future]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of parked sleepers."""
        return sum(1 for _, _, fut in self._sleepers if not fut.done())

    async def sleep(self, seconds: float) -> None:
        fut = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self._now + max(0.0, seconds), next(self._seq), fut))
        await fut

    async def settle(self) -> None:
        """Let ready tasks run until they park again."""
        for _ in range(self.SETTLE_TURNS):
            await asyncio.sleep(0)

    async def advance(self, seconds: float) -> None:
        """Move the clock forward, waking every sleeper that falls due."""
        target = self._now + seconds
        await self.settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            deadline, _, fut = heapq.heappop(self._sleepers)
            self._now = max(self._now, deadline)
            if not fut.done():
                fut.set_result(None)
            await self.settle()
        self._now = target

    async def run_until_idle(self, limit: float = 3600.0) -> None:
        """Advance until no sleepers remain (bounded by ``limit`` seconds)."""
        await self.settle()
        start = self._now
        while self._sleepers and self._now - start < limit:
            next_deadline = self._sleepers[0][0]
            await self.advance(max(0.0, next_deadline - self._now))


@dataclass
class DriverRun:
    """Registered driver task and its liveness token."""
    job_id: str
    token: CancellationToken
    task: asyncio.Task


class DriverRegistry:
    """
    Per-job registry of driver tasks.

    Starting a run for a job id that already has one cancels the older
    run's token first, so a stale run can never write over a fresh one.
    """

    def __init__(self):
        self._runs: dict[str, DriverRun] = {}

    def start(self, job_id: str, coro_factory) -> DriverRun:
        """
        Register and schedule a new run.

        Args:
            job_id: Job the run drives
            coro_factory: Callable taking the run's token, returning the coroutine

        Raises:
            RuntimeError: no running event loop; nothing is changed
        """
        loop = asyncio.get_running_loop()
        self.cancel(job_id)
        token = CancellationToken()
        coro: Coroutine = coro_factory(token)
        task = loop.create_task(coro, name=f"driver-{job_id}")
        run = DriverRun(job_id=job_id, token=token, task=task)
        self._runs[job_id] = run
        task.add_done_callback(lambda t, run=run: self._finished(run, t))
        return run

    def _finished(self, run: DriverRun, task: asyncio.Task) -> None:
        if self._runs.get(run.job_id) is run:
            del self._runs[run.job_id]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Driver for job %s crashed", run.job_id, exc_info=exc)

    def cancel(self, job_id: str) -> bool:
        """Flip the liveness token of a job's run, if any."""
        run = self._runs.get(job_id)
        if run is None:
            return False
        run.token.cancel()
        return True

    def cancel_all(self) -> int:
        """Flip every token. Returns the number of runs signalled."""
        runs = list(self._runs.values())
        for run in runs:
            run.token.cancel()
        return len(runs)

    def get(self, job_id: str) -> Optional[DriverRun]:
        return self._runs.get(job_id)

    def active_ids(self) -> list[str]:
        return list(self._runs)

    def __len__(self) -> int:
        return len(self._runs)

    async def wait(self) -> None:
        """Wait for every registered task to finish."""
        while self._runs:
            tasks = [run.task for run in self._runs.values()]
            await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel all tokens and hard-cancel the tasks."""
        self.cancel_all()
        tasks = [run.task for run in self._runs.values()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._runs.clear()
