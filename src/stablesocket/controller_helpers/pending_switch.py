"""Debounced replacement of the active connection's target."""

import logging
from functools import partial
from typing import Callable, Optional

from ..scheduling import CancellableHandle, Scheduler


class PendingSwitch:
    """
    A single re-armable debounce timer carrying the newest target address.

    Arming while already armed cancels the previous timer and starts the
    window again. A fire from a superseded arm is ignored even if the
    scheduler fails to cancel it.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay_seconds: float,
        on_due: Callable[[str], None],
        service_name: str = "default",
    ):
        self.scheduler = scheduler
        self.delay_seconds = delay_seconds
        self.on_due = on_due
        self._address: Optional[str] = None
        self._handle: Optional[CancellableHandle] = None
        self._generation = 0
        self.rearm_count = 0
        self.logger = logging.getLogger(f"{__name__}.{service_name}")

    @property
    def address(self) -> Optional[str]:
        """Address the switch will connect to, or None when disarmed."""
        return self._address

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def arm(self, address: str) -> None:
        if self.armed:
            self.rearm_count += 1
            self._handle.cancel()
            self.logger.debug("Re-arming pending switch: %s -> %s", self._address, address)
        else:
            self.logger.debug("Arming pending switch to %s (%.3fs)", address, self.delay_seconds)

        self._generation += 1
        self._address = address
        self._handle = self.scheduler.call_later(self.delay_seconds, partial(self._fire, self._generation))

    def cancel(self) -> bool:
        """Disarm the switch. Returns True if it was armed."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._address = None
        self._generation += 1
        return True

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self._address is None:
            return
        address = self._address
        self._handle = None
        self._address = None
        self.on_due(address)
