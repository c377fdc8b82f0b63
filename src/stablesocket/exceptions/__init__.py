"""Exception classes for stablesocket.

All custom exceptions inherit from ApplicationError to keep a single
hierarchy callers can catch.

Exception classes support two patterns:
1. No-argument raise: raise ControllerDisposedError()
2. Contextual attributes: err = MessageDecodeError(raw=frame); raise err
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all stablesocket errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class ConfigurationError(ApplicationError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Configuration is invalid or missing"
        super().__init__(message, **kwargs)

    @classmethod
    def invalid_value(cls, param_name: str, value, reason: str = "") -> "ConfigurationError":
        """Create error for invalid value."""
        msg = f"Invalid value for {param_name}: {value!r}"
        if reason:
            msg += f". {reason}"
        return cls(msg, param_name=param_name, value=value)


class MessageEncodeError(ApplicationError):
    """Outbound message could not be encoded as JSON."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Outbound message could not be encoded as JSON"
        super().__init__(message, **kwargs)


class MessageDecodeError(ApplicationError):
    """Inbound frame could not be decoded as JSON."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Inbound frame could not be decoded as JSON"
        super().__init__(message, **kwargs)


class ControllerDisposedError(ApplicationError):
    """Operation attempted on a disposed connection controller."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Connection controller has been disposed"
        super().__init__(message, **kwargs)


class TransportError(ApplicationError):
    """Transport could not create or drive a connection."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Transport failure"
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "ControllerDisposedError",
    "MessageDecodeError",
    "MessageEncodeError",
    "TransportError",
]
