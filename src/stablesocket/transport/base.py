from __future__ import annotations

"""Narrow transport contract the controller depends on."""

from dataclasses import dataclass
from typing import Callable, Protocol

from ..codec import Frame
from ..connection_state import ConnectionState


@dataclass(frozen=True)
class ConnectionEvents:
    """Callbacks a transport invokes for one connection handle.

    Each callback receives the handle that produced the event so the
    listener can tell current connections from discarded ones.
    """

    on_open: Callable[["TransportConnection"], None]
    on_close: Callable[["TransportConnection"], None]
    on_message: Callable[["TransportConnection", Frame], None]


class TransportConnection(Protocol):
    """One physical connection, bound to a single address for its lifetime."""

    @property
    def address(self) -> str:
        """Address the connection was created for."""
        ...

    @property
    def state(self) -> ConnectionState:
        """CONNECTING, OPEN or CLOSED. Never returns to a previous state."""
        ...

    def send(self, frame: str) -> None:
        """Hand a text frame to the transport. Only valid while OPEN."""
        ...

    def close(self) -> None:
        """Start closing. Idempotent; the handle reports CLOSED afterwards."""
        ...

    async def wait_closed(self) -> None:
        """Wait until the physical connection is fully torn down."""
        ...


class Transport(Protocol):
    """Factory for physical connections."""

    def create(self, address: str, events: ConnectionEvents) -> TransportConnection:
        """Start connecting to ``address`` and return the handle immediately."""
        ...


__all__ = ["ConnectionEvents", "Transport", "TransportConnection"]
