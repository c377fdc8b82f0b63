"""
Centralized logging configuration.

This module provides a single setup_logging function that configures
logging consistently for applications embedding stablesocket:
- Console output on stdout
- Optional file output to logs/{service_name}.log
- Fresh log file on each start unless LOG_APPEND=1
- Quieter third-party loggers (websockets, asyncio)
"""

import logging
import logging.handlers
import os
import sys
import threading
from pathlib import Path
from typing import Optional, Union

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _close_handlers(logger: logging.Logger) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as exc:
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, exc)


def _build_console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    console_handler.setLevel(level)
    return console_handler


def _resolve_log_directory(log_dir: Optional[Path]) -> Path:
    if log_dir is not None:
        return log_dir.expanduser()
    configured = os.getenv("STABLESOCKET_LOG_DIR")
    if configured:
        return Path(configured).expanduser()
    return Path.cwd() / "logs"


def _configure_file_handler(service_name: str, log_dir: Optional[Path]) -> logging.Handler:
    logs_dir = _resolve_log_directory(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"{service_name}.log"
    file_mode = "a" if os.getenv("LOG_APPEND") == "1" else "w"

    handler_cls = getattr(logging.handlers, "WatchedFileHandler", logging.FileHandler)
    file_handler = handler_cls(log_path, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.INFO)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("websockets").setLevel(logging.WARNING)


def setup_logging(
    service_name: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    *,
    log_dir: Optional[Path] = None,
) -> None:
    """Configure root logging for the application.

    Existing root handlers are closed and replaced, so calling this twice
    does not duplicate output. A file handler is only added when
    ``service_name`` is given.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)
        root_logger.handlers = []

        root_logger.addHandler(_build_console_handler(level))
        if service_name:
            root_logger.addHandler(_configure_file_handler(service_name, log_dir))

        root_logger.setLevel(level)
        _suppress_noisy_third_parties()
