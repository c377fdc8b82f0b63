"""Helper modules for ControllerConfig."""

from .config_loader import require_env_float, require_env_int

__all__ = ["require_env_float", "require_env_int"]
