"""
Canonical connection state definitions.

This module is the single source of truth for the states a managed
connection can report, shared by the transport handles and the controller.
"""

from enum import Enum


class ConnectionState(Enum):
    """
    Externally observed state of the managed connection.

    ``UNINITIALIZED`` is only reported by the controller, before any
    connection has been created or after the target was cleared. Transport
    handles move strictly ``CONNECTING -> OPEN -> CLOSED`` and never leave
    ``CLOSED``.
    """

    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"

    @property
    def is_live(self) -> bool:
        """True while a handle in this state still owns a physical connection."""
        return self in (ConnectionState.CONNECTING, ConnectionState.OPEN)
