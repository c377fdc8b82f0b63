"""
Connection controller for a single logical websocket with a movable target.

The controller owns at most one physical connection. Callers tell it where
they want to be connected with :meth:`ConnectionController.set_target`,
send application messages with :meth:`ConnectionController.send`, and
receive decoded messages through a single handler slot. Address changes
while connected are debounced, so a burst of changes causes at most one
reconnect, and changing back to the connected address cancels the switch.

Everything runs on one event loop: target changes, transport events, sends
and the debounce timer never interleave.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .codec import Frame, encode_message
from .connection_config import ControllerConfig, get_controller_config
from .connection_state import ConnectionState
from .controller_helpers import MetricsTracker, PendingSwitch, StateBroadcaster, StateListener, StatusReporter
from .exceptions import ControllerDisposedError
from .inbound_dispatch import ErrorHandler, InboundDispatcher, MessageHandler
from .outbound_queue import OutboundQueue
from .scheduling import LoopScheduler, Scheduler
from .transport import ConnectionEvents, Transport, TransportConnection, WebsocketsTransport


class ConnectionController:
    """
    Own connection creation and teardown and mediate target changes.

    Args:
        transport: Connection factory; defaults to the websockets transport
        config: Timing configuration; defaults to the environment
        scheduler: Runs the debounce timer; defaults to the running loop
        name: Label used in log records and status reports
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        *,
        config: Optional[ControllerConfig] = None,
        scheduler: Optional[Scheduler] = None,
        name: str = "default",
    ):
        self.name = name
        self.config = config or get_controller_config()
        self.transport = transport or WebsocketsTransport(self.config)
        self.scheduler = scheduler or LoopScheduler()

        self.queue = OutboundQueue()
        self.dispatcher = InboundDispatcher()
        self.metrics_tracker = MetricsTracker()
        self.pending_switch = PendingSwitch(self.scheduler, self.config.debounce_seconds, self._on_switch_due, name)
        self.status_reporter = StatusReporter(self)
        self._broadcaster = StateBroadcaster(name)

        self._target: Optional[str] = None
        self._connection: Optional[TransportConnection] = None
        self._closing: List[TransportConnection] = []
        self._close_reported = False
        self._flush_held = False
        self._disposed = False
        self.logger = logging.getLogger(f"{__name__}.{name}")

    @property
    def target(self) -> Optional[str]:
        """Most recently requested address."""
        return self._target

    @property
    def address(self) -> Optional[str]:
        """Address of the owned connection, if any."""
        return self._connection.address if self._connection is not None else None

    @property
    def state(self) -> ConnectionState:
        if self._connection is None:
            return ConnectionState.UNINITIALIZED
        return self._connection.state

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def closing_count(self) -> int:
        """Released connections whose teardown has not been reported yet."""
        return len(self._closing)

    def get_state(self) -> ConnectionState:
        return self.state

    def set_target(self, address: Optional[str]) -> None:
        """
        Point the logical connection at ``address``.

        ``None`` or an empty string closes the connection. The address of the
        owned connection is a no-op, even after the server closed it; it only
        cancels a pending switch. Otherwise, with no live connection a new one
        is created immediately, and a different address while connected arms
        the debounce timer.
        """
        self._ensure_not_disposed("set_target")
        address = address or None
        self._target = address

        if address is None:
            if self.pending_switch.cancel():
                self.logger.debug("Target cleared; pending switch cancelled")
            self._release_connection()
            self._publish_state()
            return

        owned = self._connection
        if owned is not None and owned.address == address:
            if self.pending_switch.cancel():
                self.logger.info("Target returned to %s; pending switch cancelled", address)
                self.metrics_tracker.record_switch_cancelled()
            self._resume_flush(owned)
        elif self._live_connection() is None:
            self.pending_switch.cancel()
            self._open_connection(address)
        else:
            self.pending_switch.arm(address)
        self._publish_state()

    def send(self, message: Any) -> None:
        """
        Encode ``message`` as JSON and queue it for the connection.

        Frames go out immediately when the connection is OPEN and otherwise
        wait for the next connection to open. A connection that opened while
        a switch was pending receives nothing; its frames wait for the
        replacement.

        Raises:
            MessageEncodeError: If ``message`` has no JSON representation
            ControllerDisposedError: If the controller was disposed
        """
        self._ensure_not_disposed("send")
        frame = encode_message(message)
        self.queue.enqueue(frame)

        connection = self._connection
        if connection is not None and connection.state is ConnectionState.OPEN and not self._flush_held:
            self._flush(connection)
        else:
            self.logger.debug("Queued frame until connection opens (%d pending)", len(self.queue))

    def set_message_handler(self, handler: Optional[MessageHandler]) -> None:
        """Install the inbound handler, replacing any previous one."""
        self.dispatcher.set_handler(handler)

    def set_error_handler(self, handler: Optional[ErrorHandler]) -> None:
        """Install the handler for frames that fail to decode."""
        self.dispatcher.set_error_handler(handler)

    def add_state_listener(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` on every state change; returns an unsubscribe callable."""
        return self._broadcaster.add_listener(listener)

    def get_status(self) -> Dict[str, Any]:
        return self.status_reporter.get_status()

    def dispose(self) -> None:
        """Close the connection, cancel the pending switch and detach handlers. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        self.pending_switch.cancel()
        self._release_connection()
        self.dispatcher.clear()
        self._publish_state()
        self._broadcaster.clear()
        if self.queue:
            self.logger.info("Controller disposed with %d unsent frames", len(self.queue))
        else:
            self.logger.info("Controller disposed")

    async def wait_closed(self) -> None:
        """Wait for every connection this controller closed to finish tearing down."""
        closing, self._closing = self._closing, []
        for connection in closing:
            await connection.wait_closed()

    def __enter__(self) -> "ConnectionController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    async def __aenter__(self) -> "ConnectionController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()
        await self.wait_closed()

    def _ensure_not_disposed(self, operation: str) -> None:
        if self._disposed:
            raise ControllerDisposedError(f"Cannot {operation} on disposed controller {self.name!r}", operation=operation)

    def _live_connection(self) -> Optional[TransportConnection]:
        connection = self._connection
        if connection is not None and connection.state.is_live:
            return connection
        return None

    def _open_connection(self, address: str) -> None:
        self.logger.info("Connecting to %s", address)
        events = ConnectionEvents(
            on_open=self._handle_open,
            on_close=self._handle_close,
            on_message=self._handle_message,
        )
        self._close_reported = False
        self._connection = self.transport.create(address, events)
        self.metrics_tracker.record_created()

    def _release_connection(self) -> None:
        connection = self._connection
        self._connection = None
        self._flush_held = False
        if connection is None:
            return
        # on_close may fire from inside close(); track the handle first
        if not self._close_reported:
            self._closing.append(connection)
        if connection.state.is_live:
            self.logger.info("Closing connection to %s", connection.address)
            connection.close()
            self.metrics_tracker.record_closed()

    def _forget_closing(self, connection: TransportConnection) -> None:
        if connection in self._closing:
            self._closing.remove(connection)

    def _flush(self, connection: TransportConnection) -> None:
        sent = self.queue.flush_if_ready(connection)
        self.metrics_tracker.record_sent(sent)

    def _resume_flush(self, connection: TransportConnection) -> None:
        if not self._flush_held:
            return
        self._flush_held = False
        if connection.state is ConnectionState.OPEN:
            self.logger.info("Releasing %d held frames to %s", len(self.queue), connection.address)
            self._flush(connection)

    def _publish_state(self) -> None:
        self._broadcaster.publish(self.state)

    def _is_current(self, connection: TransportConnection, event: str) -> bool:
        if self._disposed or connection is not self._connection:
            self.logger.debug("Ignoring %s event from discarded connection to %s", event, connection.address)
            return False
        return True

    def _handle_open(self, connection: TransportConnection) -> None:
        if not self._is_current(connection, "open"):
            return
        self.logger.info("Connection to %s is open", connection.address)
        self.metrics_tracker.record_opened()
        if self.pending_switch.armed:
            self._flush_held = True
            self.logger.info(
                "Holding %d queued frames for pending switch to %s", len(self.queue), self.pending_switch.address
            )
        else:
            self._flush(connection)
        self._publish_state()

    def _handle_close(self, connection: TransportConnection) -> None:
        self._forget_closing(connection)
        if not self._is_current(connection, "close"):
            return
        self._close_reported = True
        self.logger.info("Connection to %s closed by transport", connection.address)
        self.metrics_tracker.record_closed()
        self._publish_state()

    def _handle_message(self, connection: TransportConnection, raw: Frame) -> None:
        if not self._is_current(connection, "message"):
            return
        self.dispatcher.on_receive(raw)

    def _on_switch_due(self, address: str) -> None:
        if self._disposed:
            return
        self.logger.info("Switching connection from %s to %s", self.address, address)
        self._release_connection()
        self._open_connection(address)
        self.metrics_tracker.record_switch()
        self._publish_state()


__all__ = ["ConnectionController"]
