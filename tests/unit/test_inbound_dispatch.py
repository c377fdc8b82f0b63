"""Tests for inbound message dispatch."""

import logging

from stablesocket.exceptions import MessageDecodeError
from stablesocket.inbound_dispatch import InboundDispatcher


def test_decoded_message_reaches_handler():
    dispatcher = InboundDispatcher()
    received = []
    dispatcher.set_handler(received.append)

    dispatcher.on_receive('{"foo":"bar"}')
    dispatcher.on_receive(b'[1,2,3]')

    assert received == [{"foo": "bar"}, [1, 2, 3]]
    assert dispatcher.messages_received == 2


def test_message_without_handler_is_dropped():
    dispatcher = InboundDispatcher()

    dispatcher.on_receive('{"foo":"bar"}')

    received = []
    dispatcher.set_handler(received.append)
    assert received == []


def test_handler_replacement_is_last_write_wins():
    dispatcher = InboundDispatcher()
    first, second = [], []
    dispatcher.set_handler(first.append)
    dispatcher.on_receive("1")
    dispatcher.set_handler(second.append)
    dispatcher.on_receive("2")

    assert first == [1]
    assert second == [2]


def test_decode_failure_goes_to_error_handler():
    dispatcher = InboundDispatcher()
    errors, received = [], []
    dispatcher.set_handler(received.append)
    dispatcher.set_error_handler(errors.append)

    dispatcher.on_receive(b"\xff\xfe")

    assert received == []
    assert len(errors) == 1
    assert isinstance(errors[0], MessageDecodeError)
    assert errors[0].raw == b"\xff\xfe"
    assert dispatcher.decode_failures == 1


def test_decode_failure_without_error_handler_is_logged(caplog):
    dispatcher = InboundDispatcher()

    with caplog.at_level(logging.WARNING, logger="stablesocket.inbound_dispatch"):
        dispatcher.on_receive("{oops")

    assert "undecodable frame" in caplog.text


def test_raising_handler_is_contained(caplog):
    dispatcher = InboundDispatcher()

    def broken(message):
        raise KeyError("missing")

    dispatcher.set_handler(broken)

    with caplog.at_level(logging.ERROR, logger="stablesocket.inbound_dispatch"):
        dispatcher.on_receive("{}")

    assert "Message handler raised" in caplog.text


def test_clear_removes_both_handlers():
    dispatcher = InboundDispatcher()
    dispatcher.set_handler(print)
    dispatcher.set_error_handler(print)

    dispatcher.clear()

    assert dispatcher.handler is None
