from __future__ import annotations

from typing import Any, List, Tuple

import orjson

from stablesocket.connection_state import ConnectionState
from stablesocket.exceptions import TransportError
from stablesocket.transport.base import ConnectionEvents


class FakeConnection:
    """Scriptable transport handle; tests fire its events by hand."""

    def __init__(self, address: str, events: ConnectionEvents, log: List[Tuple[Any, ...]]):
        self.address = address
        self.events = events
        self.state = ConnectionState.CONNECTING
        self.sent: List[str] = []
        self.close_calls = 0
        self.wait_closed_calls = 0
        self.fail_sends_after: int | None = None
        self._log = log

    def send(self, frame: str) -> None:
        if self.state is not ConnectionState.OPEN:
            raise TransportError(f"send on {self.state.value} connection")
        if self.fail_sends_after is not None and len(self.sent) >= self.fail_sends_after:
            raise TransportError("injected send failure")
        self.sent.append(frame)
        self._log.append(("send", self.address, frame))

    def close(self) -> None:
        self.close_calls += 1
        if self.state is ConnectionState.CLOSED:
            return
        self.state = ConnectionState.CLOSED
        self._log.append(("close", self.address))

    async def wait_closed(self) -> None:
        self.wait_closed_calls += 1

    def trigger_open(self) -> None:
        self.state = ConnectionState.OPEN
        self.events.on_open(self)

    def trigger_close(self) -> None:
        self.state = ConnectionState.CLOSED
        self.events.on_close(self)

    def trigger_message(self, payload: Any) -> None:
        frame = payload if isinstance(payload, (str, bytes)) else orjson.dumps(payload).decode()
        self.events.on_message(self, frame)


class FakeTransport:
    """Records every connection it creates, in order."""

    def __init__(self) -> None:
        self.connections: List[FakeConnection] = []
        self.log: List[Tuple[Any, ...]] = []

    def create(self, address: str, events: ConnectionEvents) -> FakeConnection:
        connection = FakeConnection(address, events, self.log)
        self.connections.append(connection)
        self.log.append(("create", address))
        return connection

    def ensure_single(self) -> FakeConnection:
        assert len(self.connections) == 1, f"expected one connection, got {len(self.connections)}"
        return self.connections[0]

    def live(self) -> List[FakeConnection]:
        return [conn for conn in self.connections if conn.state.is_live]
