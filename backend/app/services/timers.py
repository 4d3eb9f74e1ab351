"""Cancellable timer scheduling."""

import asyncio
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """A pending callback that can be cancelled."""

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""


class Scheduler(Protocol):
    """Timer contract used by the feedback prompt."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""


class AsyncioScheduler:
    """Scheduler backed by the asyncio event loop.

    Without an explicit loop, the running loop at scheduling time is used.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)
