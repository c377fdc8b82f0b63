from __future__ import annotations

"""Deferred-call scheduling for the controller's debounce timer."""

import asyncio
from typing import Callable, Optional, Protocol


class CancellableHandle(Protocol):
    """Handle for a scheduled callback. ``cancel`` is a no-op once fired."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay on the controller's loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> CancellableHandle: ...


class LoopScheduler:
    """
    Schedule callbacks on an asyncio event loop.

    The loop is resolved on first use, so a controller can be created before
    the loop starts as long as timers are only armed from inside it.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


__all__ = ["CancellableHandle", "LoopScheduler", "Scheduler"]
