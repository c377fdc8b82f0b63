"""
stablesocket: one logical websocket connection whose target can move.

The connection controller keeps exactly one physical connection, debounces
target changes, queues outbound messages until the connection opens and
delivers inbound messages to a single handler.
"""

from .codec import decode_message, encode_message
from .connection_config import ControllerConfig, get_controller_config
from .connection_state import ConnectionState
from .controller import ConnectionController
from .exceptions import (
    ApplicationError,
    ConfigurationError,
    ControllerDisposedError,
    MessageDecodeError,
    MessageEncodeError,
    TransportError,
)
from .inbound_dispatch import InboundDispatcher
from .logging_config import setup_logging
from .outbound_queue import OutboundQueue
from .scheduling import LoopScheduler
from .transport import ConnectionEvents, Transport, TransportConnection, WebsocketsTransport

__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "ConnectionController",
    "ConnectionEvents",
    "ConnectionState",
    "ControllerConfig",
    "ControllerDisposedError",
    "InboundDispatcher",
    "LoopScheduler",
    "MessageDecodeError",
    "MessageEncodeError",
    "OutboundQueue",
    "Transport",
    "TransportConnection",
    "TransportError",
    "WebsocketsTransport",
    "decode_message",
    "encode_message",
    "get_controller_config",
    "setup_logging",
]
