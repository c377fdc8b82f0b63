"""Environment lookups with built-in defaults for ControllerConfig."""

from ..config import ConfigurationError, env_float, env_int

_DEFAULT_INT_VALUES = {
    "STABLESOCKET_MAX_MESSAGE_BYTES": 1024 * 1024,
}

_DEFAULT_FLOAT_VALUES = {
    "STABLESOCKET_DEBOUNCE_SECONDS": 1.0,
    "STABLESOCKET_OPEN_TIMEOUT_SECONDS": 10.0,
    "STABLESOCKET_CLOSE_TIMEOUT_SECONDS": 5.0,
    "STABLESOCKET_PING_INTERVAL_SECONDS": 20.0,
}


def require_env_int(name: str) -> int:
    """Get an environment variable as integer, using default if available."""
    value = env_int(name, or_value=None, required=False)
    if value is not None:
        return value
    if name in _DEFAULT_INT_VALUES:
        return _DEFAULT_INT_VALUES[name]
    raise ConfigurationError(f"Environment variable {name} must be defined")


def require_env_float(name: str) -> float:
    """Get an environment variable as float, using default if available."""
    value = env_float(name, or_value=None, required=False)
    if value is not None:
        return value
    if name in _DEFAULT_FLOAT_VALUES:
        return _DEFAULT_FLOAT_VALUES[name]
    raise ConfigurationError(f"Environment variable {name} must be defined")
