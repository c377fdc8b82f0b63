"""
Configuration for the connection controller and its websocket transport.

Values come from environment variables (or a ``.env`` file) with built-in
defaults, so a controller can be created with no configuration at all.
"""

from dataclasses import dataclass, field, fields
from functools import partial
from typing import Any, Optional

from .config import ConfigurationError
from .connectionconfig_helpers import require_env_float, require_env_int


@dataclass
class ControllerConfig:
    """
    Timing and size limits for a managed connection.

    All durations are in seconds.

    Attributes:
        debounce_seconds: Quiet period after the last target change before the
            active connection is replaced
        open_timeout_seconds: Maximum time to wait for the opening handshake
        close_timeout_seconds: Maximum time to wait for the closing handshake
        ping_interval_seconds: Keepalive ping interval; 0 disables pings
        max_message_bytes: Largest inbound frame accepted by the transport
    """

    debounce_seconds: float = field(default_factory=partial(require_env_float, "STABLESOCKET_DEBOUNCE_SECONDS"))
    open_timeout_seconds: float = field(default_factory=partial(require_env_float, "STABLESOCKET_OPEN_TIMEOUT_SECONDS"))
    close_timeout_seconds: float = field(default_factory=partial(require_env_float, "STABLESOCKET_CLOSE_TIMEOUT_SECONDS"))
    ping_interval_seconds: float = field(default_factory=partial(require_env_float, "STABLESOCKET_PING_INTERVAL_SECONDS"))
    max_message_bytes: int = field(default_factory=partial(require_env_int, "STABLESOCKET_MAX_MESSAGE_BYTES"))

    def __post_init__(self) -> None:
        for name in ("debounce_seconds", "open_timeout_seconds", "close_timeout_seconds", "ping_interval_seconds"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError.invalid_value(name, value, "Durations must be non-negative")
        if self.max_message_bytes <= 0:
            raise ConfigurationError.invalid_value("max_message_bytes", self.max_message_bytes, "Must be positive")

    @property
    def ping_interval(self) -> Optional[float]:
        """Ping interval as the transport expects it, ``None`` when disabled."""
        return self.ping_interval_seconds or None


def get_controller_config(**overrides: Any) -> ControllerConfig:
    """
    Build a controller configuration from the environment.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        ControllerConfig with overrides applied

    Raises:
        ConfigurationError: If an override names an unknown field or a value
            is out of range
    """
    known = {item.name for item in fields(ControllerConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"Unknown controller config fields: {', '.join(unknown)}")
    return ControllerConfig(**overrides)
