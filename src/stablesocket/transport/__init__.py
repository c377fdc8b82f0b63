"""Transport contract and the websockets-backed implementation."""

from .base import ConnectionEvents, Transport, TransportConnection
from .websockets_transport import WebsocketsConnection, WebsocketsTransport

__all__ = [
    "ConnectionEvents",
    "Transport",
    "TransportConnection",
    "WebsocketsConnection",
    "WebsocketsTransport",
]
