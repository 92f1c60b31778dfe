"""
Cancellable repeating task for the countdown tick.

Runs on the asyncio event loop, so the tick callback and every other
transition execute on one thread and never interleave mid-update.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class TickScheduler:
    """
    Calls ``callback`` every ``interval`` seconds until stopped.

    Use as an async context manager to guarantee the task is cancelled on
    every exit path:

        async with TickScheduler(on_tick) as scheduler:
            ...
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float = 1.0,
        sleep: SleepFn = asyncio.sleep,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.callback = callback
        self.interval = interval
        self.ticks = 0
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self._cancel_requested = False

    @property
    def running(self) -> bool:
        return (
            self._task is not None
            and not self._task.done()
            and not self._cancel_requested
        )

    def start(self) -> None:
        """Schedule the repeating task. No-op if already running."""
        if self.running:
            return
        self._cancel_requested = False
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Tick scheduler started (interval=%ss)", self.interval)

    def cancel(self) -> None:
        """Request cancellation. Safe to call from inside the callback."""
        if self.running:
            self._task.cancel()
            self._cancel_requested = True
            logger.debug("Tick scheduler cancelled after %d ticks", self.ticks)

    async def stop(self) -> None:
        """Cancel and wait for the task to finish."""
        self.cancel()
        task, self._task = self._task, None
        if task is None or task is asyncio.current_task():
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await self._sleep(self.interval)
            self.ticks += 1
            self.callback()

    async def __aenter__(self) -> TickScheduler:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
