"""WebSocket transport built on the ``websockets`` asyncio client."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from websockets import ConnectionClosed, WebSocketException
from websockets.asyncio.client import connect

from ..connection_config import ControllerConfig
from ..connection_state import ConnectionState
from ..exceptions import TransportError
from .base import ConnectionEvents

if TYPE_CHECKING:
    from websockets.asyncio.client import ClientConnection

ConnectionFactory = Callable[[str], Awaitable[Any]]

logger = logging.getLogger(__name__)


class WebsocketsConnection:
    """
    One websocket client connection driven by a single asyncio task.

    The task opens the connection, reports ``on_open``, forwards every
    inbound frame to ``on_message`` and reports ``on_close`` exactly once,
    whatever ends the connection. Outbound frames go through a queue drained
    by a writer task, so they reach the wire in the order ``send`` was called.
    """

    def __init__(
        self,
        address: str,
        events: ConnectionEvents,
        *,
        connection_factory: ConnectionFactory,
        open_timeout: float,
        close_timeout: float,
    ):
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise TransportError("WebsocketsTransport requires a running event loop", address=address) from exc

        self._address = address
        self._events = events
        self._connection_factory = connection_factory
        self._open_timeout = open_timeout
        self._close_timeout = close_timeout
        self._state = ConnectionState.CONNECTING
        self._websocket: Optional["ClientConnection"] = None
        self._outgoing: asyncio.Queue[Optional[str]] = asyncio.Queue()
        self._close_requested = False
        self._finished = False
        self.logger = logger

        self._task = loop.create_task(self._run(), name=f"stablesocket:{address}")
        self._task.add_done_callback(self._on_task_done)

    @property
    def address(self) -> str:
        return self._address

    @property
    def state(self) -> ConnectionState:
        return self._state

    def send(self, frame: str) -> None:
        if self._state is not ConnectionState.OPEN:
            raise TransportError(f"Cannot send on a {self._state.value} connection", address=self._address)
        self._outgoing.put_nowait(frame)

    def close(self) -> None:
        if self._close_requested:
            return
        self._close_requested = True
        self._state = ConnectionState.CLOSED
        if self._websocket is None:
            self.logger.debug("Cancelling connection attempt to %s", self._address)
            self._task.cancel()
        else:
            self.logger.info("Closing WebSocket connection to %s", self._address)
            self._outgoing.put_nowait(None)

    async def wait_closed(self) -> None:
        await asyncio.gather(self._task, return_exceptions=True)

    async def _run(self) -> None:
        websocket = None
        try:
            self.logger.info("Establishing WebSocket connection to %s", self._address)
            websocket = await _open_websocket(self._connection_factory, self._address, self._open_timeout)
            if self._close_requested:
                return

            self._websocket = websocket
            self._state = ConnectionState.OPEN
            self.logger.info("WebSocket connection to %s established", self._address)
            self._events.on_open(self)
            await self._pump(websocket)
        except asyncio.CancelledError:
            self.logger.debug("Connection task cancelled")
            raise
        except asyncio.TimeoutError:
            self.logger.warning("WebSocket opening handshake to %s timed out after %.1fs", self._address, self._open_timeout)
        except ConnectionClosed as exc:
            self.logger.info("WebSocket connection to %s closed: %s", self._address, exc)
        except (WebSocketException, OSError) as exc:
            self.logger.warning("WebSocket connection to %s failed: %s", self._address, exc)
        finally:
            self._state = ConnectionState.CLOSED
            if websocket is not None:
                await _close_websocket(websocket, self._close_timeout, self.logger)

    async def _pump(self, websocket: "ClientConnection") -> None:
        writer = asyncio.create_task(self._write_loop(websocket))
        try:
            async for frame in websocket:
                self._events.on_message(self, frame)
        finally:
            writer.cancel()
            await asyncio.gather(writer, return_exceptions=True)

    async def _write_loop(self, websocket: "ClientConnection") -> None:
        while True:
            frame = await self._outgoing.get()
            if frame is None:
                await _close_websocket(websocket, self._close_timeout, self.logger)
                return
            try:
                await websocket.send(frame)
            except (WebSocketException, OSError) as exc:
                self.logger.warning("Failed to send frame to %s: %s", self._address, exc)
                self._state = ConnectionState.CLOSED
                await _close_websocket(websocket, self._close_timeout, self.logger)
                return
            self.logger.debug("Sent frame: %s", frame[:100])

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        if self._finished:
            return
        self._finished = True
        self._state = ConnectionState.CLOSED
        if not task.cancelled() and task.exception() is not None:
            self.logger.error("Connection task for %s failed", self._address, exc_info=task.exception())
        self.logger.info("WebSocket connection cleanup completed for %s", self._address)
        self._events.on_close(self)


class WebsocketsTransport:
    """Creates :class:`WebsocketsConnection` handles from a controller config."""

    def __init__(
        self,
        config: Optional[ControllerConfig] = None,
        connection_factory: Optional[ConnectionFactory] = None,
    ):
        self.config = config or ControllerConfig()
        self.connection_factory = connection_factory or self._default_factory

    def create(self, address: str, events: ConnectionEvents) -> WebsocketsConnection:
        return WebsocketsConnection(
            address,
            events,
            connection_factory=self.connection_factory,
            open_timeout=self.config.open_timeout_seconds,
            close_timeout=self.config.close_timeout_seconds,
        )

    def _default_factory(self, address: str) -> Awaitable[Any]:
        return connect(
            address,
            open_timeout=None,
            ping_interval=self.config.ping_interval,
            close_timeout=self.config.close_timeout_seconds,
            max_size=self.config.max_message_bytes,
        )


async def _open_websocket(connection_factory: ConnectionFactory, address: str, timeout: float):
    """Open a websocket via the factory, bounded by the opening timeout."""
    if timeout:
        return await asyncio.wait_for(connection_factory(address), timeout=timeout)
    return await connection_factory(address)


async def _close_websocket(websocket: Any, timeout: float, log: logging.Logger) -> None:
    try:
        await asyncio.wait_for(websocket.close(), timeout=timeout or None)
    except (asyncio.TimeoutError, WebSocketException, OSError, RuntimeError):
        log.warning("Error closing WebSocket", exc_info=True)


__all__ = ["ConnectionFactory", "WebsocketsConnection", "WebsocketsTransport"]
