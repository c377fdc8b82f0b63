"""Routes received frames to the single registered message handler."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .codec import Frame, decode_message
from .exceptions import MessageDecodeError

MessageHandler = Callable[[Any], None]
ErrorHandler = Callable[[MessageDecodeError], None]

logger = logging.getLogger(__name__)


class InboundDispatcher:
    """
    Deliver each decoded message to the current handler.

    There is one handler slot; registering a new handler replaces the old
    one and past messages are not replayed to it. Frames that arrive while
    no handler is registered are dropped.
    """

    def __init__(self) -> None:
        self._handler: Optional[MessageHandler] = None
        self._error_handler: Optional[ErrorHandler] = None
        self.messages_received = 0
        self.decode_failures = 0

    @property
    def handler(self) -> Optional[MessageHandler]:
        return self._handler

    def set_handler(self, handler: Optional[MessageHandler]) -> None:
        self._handler = handler

    def set_error_handler(self, handler: Optional[ErrorHandler]) -> None:
        self._error_handler = handler

    def clear(self) -> None:
        self._handler = None
        self._error_handler = None

    def on_receive(self, raw: Frame) -> None:
        """Decode ``raw`` and forward it. Never raises."""
        self.messages_received += 1
        try:
            message = decode_message(raw)
        except MessageDecodeError as exc:
            self.decode_failures += 1
            self._report_decode_failure(exc)
            return

        handler = self._handler
        if handler is None:
            logger.debug("No message handler registered; dropping message")
            return

        try:
            handler(message)
        except Exception:  # policy_guard: allow-broad-except
            logger.exception("Message handler raised")

    def _report_decode_failure(self, error: MessageDecodeError) -> None:
        error_handler = self._error_handler
        if error_handler is None:
            logger.warning("Dropping undecodable frame: %s", error)
            return
        try:
            error_handler(error)
        except Exception:  # policy_guard: allow-broad-except
            logger.exception("Decode error handler raised")
