# scheduler.py
"""
Cooperative periodic task scheduler for the exercise timer, risk monitor and
breathing guide. Every task has its own cancellation handle, and due tasks
are run by run_pending(now) so tests can drive logical time directly.
"""

import asyncio
import time
from typing import Callable, List, Optional

from fitness_coach.config import config
from fitness_coach.utils.logging_utils import logger


class TaskHandle:
    """A periodic callback registered on the Scheduler"""

    def __init__(self, name: str, interval: float, callback: Callable[[], None], next_run: float):
        self.name = name
        self.interval = interval
        self.callback = callback
        self.next_run = next_run
        self.cancelled = False
        self.run_count = 0

    def cancel(self):
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else f"next={self.next_run:.2f}"
        return f"<TaskHandle {self.name} every {self.interval}s {state}>"


class Scheduler:
    """
    Holds periodic tasks and runs those that are due.
    All callbacks run on the caller's thread, one after another.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.tasks: List[TaskHandle] = []
        self._running = False

    def schedule_every(self, interval: float, callback: Callable[[], None], name: str = "task") -> TaskHandle:
        """Register `callback` to run every `interval` seconds, first run one interval from now"""
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        handle = TaskHandle(name, interval, callback, self.clock() + interval)
        self.tasks.append(handle)
        logger.debug(f"Scheduled {handle}")
        return handle

    def run_pending(self, now: Optional[float] = None) -> int:
        """
        Run every task that is due at `now`, once per elapsed interval.
        Errors in a callback are logged and do not stop other tasks.
        Returns the number of callbacks executed.
        """
        if now is None:
            now = self.clock()

        executed = 0
        for handle in list(self.tasks):
            while not handle.cancelled and handle.next_run <= now:
                handle.next_run += handle.interval
                handle.run_count += 1
                executed += 1
                try:
                    handle.callback()
                except Exception as e:
                    logger.error(f"Error in scheduled task {handle.name}: {e}")

        self.tasks = [handle for handle in self.tasks if not handle.cancelled]
        return executed

    async def run_forever(self, resolution: Optional[float] = None):
        """Drive run_pending from the event loop until stop() is called"""
        resolution = resolution or config.scheduler_resolution
        self._running = True
        logger.info("Scheduler started")
        while self._running:
            self.run_pending()
            await asyncio.sleep(resolution)
        logger.info("Scheduler stopped")

    def stop(self):
        self._running = False

    def cancel_all(self):
        for handle in self.tasks:
            handle.cancel()
        self.tasks = []
