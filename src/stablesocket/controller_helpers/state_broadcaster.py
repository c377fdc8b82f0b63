"""Connection state change notifications."""

import logging
from typing import Callable, List

from ..connection_state import ConnectionState

StateListener = Callable[[ConnectionState], None]


class StateBroadcaster:
    """Notifies listeners whenever the observed connection state changes."""

    def __init__(self, service_name: str = "default"):
        self._listeners: List[StateListener] = []
        self._last_state = ConnectionState.UNINITIALIZED
        self.logger = logging.getLogger(f"{__name__}.{service_name}")

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        self._listeners.clear()

    def publish(self, state: ConnectionState) -> bool:
        """Notify listeners if ``state`` differs from the last one published."""
        if state is self._last_state:
            return False
        previous = self._last_state
        self._last_state = state
        self.logger.info("State transition: %s -> %s", previous.value, state.value)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:  # policy_guard: allow-broad-except
                self.logger.exception("State listener raised")
        return True
