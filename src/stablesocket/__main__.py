#!/usr/bin/env python3
"""Line-oriented websocket client built on the connection controller.

Usage:
    python -m stablesocket wss://echo.example.com/

Every stdin line is parsed as JSON and sent; every received message is
printed as one JSON line. Control lines:

    :connect URL   retarget the connection (debounced while connected)
    :close         clear the target and close the connection
    :status        print the controller status
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from .codec import decode_message, encode_message
from .connection_config import get_controller_config
from .controller import ConnectionController
from .exceptions import ApplicationError, MessageDecodeError
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stablesocket", description=__doc__.splitlines()[0])
    parser.add_argument("url", nargs="?", help="Initial websocket address")
    parser.add_argument("--debounce", type=float, default=None, help="Seconds to wait before switching to a new address")
    parser.add_argument("--log-level", default="WARNING", help="Console log level (default: WARNING)")
    parser.add_argument("--log-file-name", default=None, help="Also log to logs/<name>.log")
    return parser


async def _open_stdin() -> asyncio.StreamReader:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    return reader


def _print_message(message) -> None:
    print(encode_message(message), flush=True)


def _print_error(error: Exception) -> None:
    print(f"! {error}", file=sys.stderr, flush=True)


def handle_line(controller: ConnectionController, line: str) -> None:
    """Apply one line of user input to the controller."""
    line = line.strip()
    if not line:
        return
    if line == ":close":
        controller.set_target(None)
        return
    if line == ":status":
        _print_message(controller.get_status())
        return
    if line.startswith(":connect"):
        controller.set_target(line[len(":connect") :].strip() or None)
        return

    try:
        message = decode_message(line)
    except MessageDecodeError as exc:
        _print_error(exc)
        return
    controller.send(message)


async def run(url: Optional[str], debounce: Optional[float] = None) -> int:
    overrides = {} if debounce is None else {"debounce_seconds": debounce}
    config = get_controller_config(**overrides)
    stdin = await _open_stdin()

    async with ConnectionController(config=config, name="cli") as controller:
        controller.set_message_handler(_print_message)
        controller.set_error_handler(_print_error)
        controller.add_state_listener(lambda state: logger.info("Connection state: %s", state.value))
        controller.set_target(url)

        while True:
            raw = await stdin.readline()
            if not raw:
                break
            handle_line(controller, raw.decode("utf-8", errors="replace"))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_file_name, args.log_level)
    try:
        return asyncio.run(run(args.url, args.debounce))
    except KeyboardInterrupt:
        return 130
    except ApplicationError as exc:
        _print_error(exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
