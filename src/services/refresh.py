"""Cancellable periodic task used to keep a dashboard scope fresh."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional

import structlog

logger = structlog.get_logger()


class PeriodicTask:
    """
    Runs an async callback now and then every ``interval`` seconds.

    Start it when a scope is entered and cancel it when the scope is left,
    either explicitly or with ``async with``. A failing callback is logged
    and the loop keeps going.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[object]],
        interval: float,
        name: str = "periodic_task",
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.callback = callback
        self.interval = interval
        self.name = name
        self.runs = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the loop; a no-op if it is already running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=self.name)
        logger.debug("periodic_task_started", task=self.name, interval=self.interval)

    async def cancel(self) -> None:
        """Stop the loop and wait until it has unwound."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # Only swallow the loop's own cancellation, not one aimed at our caller
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        logger.debug("periodic_task_cancelled", task=self.name, runs=self.runs)

    async def _run(self) -> None:
        while True:
            try:
                await self.callback()
            except Exception as e:
                logger.error("periodic_task_failed", task=self.name, error=str(e))
            self.runs += 1
            await asyncio.sleep(self.interval)

    async def __aenter__(self) -> "PeriodicTask":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.cancel()
