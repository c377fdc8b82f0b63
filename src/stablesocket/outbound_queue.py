"""Ordered buffer of encoded frames waiting for an open connection."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Tuple

from .connection_state import ConnectionState
from .exceptions import TransportError
from .transport.base import TransportConnection

logger = logging.getLogger(__name__)


class OutboundQueue:
    """
    FIFO of frames decoupled from connection readiness.

    Frames survive a connection being replaced: whatever is still queued
    when one connection closes is delivered to the next connection that
    reaches OPEN, in the original submission order.
    """

    def __init__(self) -> None:
        self._frames: Deque[str] = deque()

    def __len__(self) -> int:
        return len(self._frames)

    def enqueue(self, frame: str) -> None:
        self._frames.append(frame)

    def pending(self) -> Tuple[str, ...]:
        """Snapshot of queued frames, head first."""
        return tuple(self._frames)

    def clear(self) -> int:
        """Drop every queued frame and return how many were dropped."""
        dropped = len(self._frames)
        self._frames.clear()
        return dropped

    def flush_if_ready(self, connection: TransportConnection) -> int:
        """
        Drain the queue onto ``connection`` while it stays OPEN.

        Each frame is removed only after the transport accepted it, so a
        frame is never sent twice. If the connection stops being OPEN, or the
        transport rejects a frame, the rest stays queued.

        Returns:
            Number of frames handed to the transport
        """
        sent = 0
        while self._frames:
            if connection.state is not ConnectionState.OPEN:
                logger.debug("Connection to %s left OPEN mid-flush; %d frames stay queued", connection.address, len(self._frames))
                break
            try:
                connection.send(self._frames[0])
            except (TransportError, OSError, RuntimeError) as exc:
                logger.warning("Transport rejected frame for %s: %s", connection.address, exc)
                break
            self._frames.popleft()
            sent += 1

        if sent:
            logger.debug("Flushed %d frames to %s", sent, connection.address)
        return sent
