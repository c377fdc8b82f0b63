"""Tests for the JSON wire codec."""

import pytest

from stablesocket.codec import decode_message, encode_message
from stablesocket.exceptions import MessageDecodeError, MessageEncodeError


def test_encode_is_compact_json_text():
    assert encode_message({"a": 1}) == '{"a":1}'
    assert encode_message({"homer": "simpson"}) == '{"homer":"simpson"}'
    assert encode_message([1, None, True]) == "[1,null,true]"


def test_encode_keeps_non_ascii_as_utf8():
    assert encode_message({"name": "Zoë"}) == '{"name":"Zoë"}'


def test_encode_stringifies_non_string_keys():
    assert encode_message({1: "a"}) == '{"1":"a"}'
    assert encode_message({"outer": {2: [3]}}) == '{"outer":{"2":[3]}}'


def test_encode_accepts_64_bit_integers():
    assert encode_message({"n": 2**63 - 1}) == '{"n":9223372036854775807}'


def test_encode_rejects_integers_wider_than_64_bits():
    with pytest.raises(MessageEncodeError):
        encode_message({"n": 2**70})


def test_encode_rejects_unserializable_values():
    with pytest.raises(MessageEncodeError) as excinfo:
        encode_message({"when": object()})

    assert isinstance(excinfo.value.__cause__, TypeError)
    assert "when" in excinfo.value.payload


def test_decode_accepts_text_and_bytes():
    assert decode_message('{"a":1}') == {"a": 1}
    assert decode_message(b'{"b":2}') == {"b": 2}


@pytest.mark.parametrize("frame", ["", "{", b"\xff", "nope"])
def test_decode_rejects_malformed_frames(frame):
    with pytest.raises(MessageDecodeError):
        decode_message(frame)


def test_decode_rejects_unsupported_frame_types():
    with pytest.raises(MessageDecodeError):
        decode_message(12345)
