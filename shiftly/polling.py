"""
Periodic refresh task owned by a controller.

A Poller runs one asyncio task that sleeps for `interval` seconds, checks its
stop event, then awaits the callback. stop() only sets the event: a callback
that is already running (an HTTP call, say) is allowed to finish.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class Poller:
    """Explicit start/stop wrapper around a repeating coroutine."""

    def __init__(self, interval: float, callback: Callable[[], Awaitable[object]], name: str = "poller"):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.callback = callback
        self.name = name
        self.ticks = 0
        self._stop: asyncio.Event | None = None
        self._task: asyncio.Task | None = None
        # Stopped tasks stay referenced until their last tick finishes
        self._tasks: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._stop is not None and not self._stop.is_set()

    def start(self) -> None:
        """Begin polling. Must be called from inside a running event loop."""
        if self.running:
            logger.debug("Poller '%s' already running", self.name)
            return
        stop = asyncio.Event()
        self._stop = stop
        self._task = asyncio.create_task(self._run(stop), name=f"poll:{self.name}")
        self._tasks.add(self._task)
        self._task.add_done_callback(self._tasks.discard)
        logger.debug("Poller '%s' started (every %.1fs)", self.name, self.interval)

    def stop(self) -> None:
        """Stop future ticks. Does not interrupt a tick in progress."""
        if self._stop is None:
            return
        self._stop.set()
        self._stop = None
        self._task = None
        logger.debug("Poller '%s' stopped after %d ticks", self.name, self.ticks)

    async def _run(self, stop: asyncio.Event) -> None:
        # Each task holds its own event so a stop/start pair never revives
        # the previous loop.
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
            if stop.is_set():
                return
            self.ticks += 1
            try:
                await self.callback()
            except Exception:
                logger.exception("Poller '%s' tick failed", self.name)

    def __repr__(self) -> str:
        return f"<Poller name={self.name!r} interval={self.interval} running={self.running}>"
