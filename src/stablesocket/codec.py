"""JSON wire codec for application messages.

Frames are compact UTF-8 JSON text: ``{"a":1}`` with no whitespace between
tokens.
"""

from __future__ import annotations

from typing import Any, Union

import orjson

from .exceptions import MessageDecodeError, MessageEncodeError

Frame = Union[str, bytes, bytearray, memoryview]


def encode_message(message: Any) -> str:
    """Encode an application value as a JSON text frame.

    Non-string dict keys are written as strings. Integers must fit in 64 bits.

    Raises:
        MessageEncodeError: If the value has no JSON representation
    """
    try:
        return orjson.dumps(message, option=orjson.OPT_NON_STR_KEYS).decode("utf-8")
    except orjson.JSONEncodeError as exc:
        raise MessageEncodeError(f"Cannot encode {type(message).__name__} as JSON: {exc}", payload=message) from exc


def decode_message(frame: Frame) -> Any:
    """Decode a received text or binary frame into an application value.

    Raises:
        MessageDecodeError: If the frame is not valid UTF-8 JSON
    """
    try:
        return orjson.loads(frame)
    except orjson.JSONDecodeError as exc:
        raise MessageDecodeError(f"Invalid JSON frame: {exc}", raw=frame) from exc
    except TypeError as exc:
        raise MessageDecodeError(f"Unsupported frame type {type(frame).__name__}", raw=frame) from exc


__all__ = ["Frame", "decode_message", "encode_message"]
