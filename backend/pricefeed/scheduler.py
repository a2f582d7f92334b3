"""Fixed-rate periodic and one-off background tasks on the event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


class Scheduler:
    """Drives the feed's refresh cadences.

    Each periodic job fires on a fixed rate measured from when it was
    registered, not from when the previous run finished. Every tick spawns
    the job as its own task, so a slow fetch never delays the next tick and
    runs may overlap.

    Failures inside a job are logged and never propagate.
    """

    def __init__(self) -> None:
        self._loops: dict[str, asyncio.Task] = {}
        self._in_flight: set[asyncio.Task] = set()

    def run_periodically(self, name: str, job: Job, interval: float) -> None:
        """Run ``job`` every ``interval`` seconds; the first run is one interval from now.

        Registering a name that is already scheduled is a no-op.
        """
        if name in self._loops:
            logger.debug("Periodic task %s already scheduled", name)
            return
        self._loops[name] = asyncio.create_task(self._run_loop(name, job, interval), name=name)
        logger.info("Scheduled %s every %.1fs", name, interval)

    def run_soon(self, name: str, job: Job) -> asyncio.Task:
        """Spawn ``job`` once as a background task."""
        task = asyncio.create_task(job(), name=name)
        self._in_flight.add(task)
        task.add_done_callback(self._on_job_done)
        return task

    def is_scheduled(self, name: str) -> bool:
        return name in self._loops

    @property
    def in_flight(self) -> set[asyncio.Task]:
        """Spawned job runs that have not finished yet."""
        return set(self._in_flight)

    async def stop(self) -> None:
        """Cancel all periodic loops and in-flight jobs. Safe to call multiple times."""
        tasks = [*self._loops.values(), *self._in_flight]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._loops.clear()
        self._in_flight.clear()
        logger.info("Scheduler stopped")

    # --- Internal ---

    async def _run_loop(self, name: str, job: Job, interval: float) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time() + interval
        while True:
            await asyncio.sleep(max(0.0, next_run - loop.time()))
            next_run += interval
            self.run_soon(name, job)

    def _on_job_done(self, task: asyncio.Task) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Task %s failed", task.get_name(), exc_info=exc)
