"""Tests for the stdin line handler of the command-line client."""

import orjson
import pytest

from stablesocket.__main__ import _build_parser, handle_line
from stablesocket.connection_state import ConnectionState

API = "wss://api.example.com/"
TESTING = "wss://testing.example.com/"


def test_parser_defaults():
    args = _build_parser().parse_args([API])

    assert args.url == API
    assert args.debounce is None
    assert args.log_level == "WARNING"
    assert args.log_file_name is None


def test_parser_accepts_debounce_override():
    args = _build_parser().parse_args([API, "--debounce", "0.25"])

    assert args.debounce == pytest.approx(0.25)


def test_json_lines_are_sent(controller, fake_transport):
    controller.set_target(API)
    handle_line(controller, '{"a": 1}\n')
    handle_line(controller, "[1, 2]")

    conn = fake_transport.ensure_single()
    conn.trigger_open()

    assert conn.sent == ['{"a":1}', "[1,2]"]


def test_blank_lines_are_ignored(controller):
    handle_line(controller, "   \n")

    assert len(controller.queue) == 0


def test_invalid_json_is_reported_not_sent(controller, capsys):
    handle_line(controller, "{not json")

    captured = capsys.readouterr()
    assert captured.err.startswith("! ")
    assert len(controller.queue) == 0


def test_connect_command_retargets(controller, fake_transport, scheduler):
    controller.set_target(API)
    fake_transport.ensure_single().trigger_open()

    handle_line(controller, f":connect {TESTING}")
    assert controller.target == TESTING
    assert controller.address == API

    scheduler.advance(1.0)
    assert controller.address == TESTING


def test_connect_without_address_clears_target(controller, fake_transport):
    controller.set_target(API)

    handle_line(controller, ":connect")

    assert controller.target is None
    assert controller.state is ConnectionState.UNINITIALIZED
    assert fake_transport.connections[0].close_calls == 1


def test_close_command(controller, fake_transport):
    controller.set_target(API)
    fake_transport.ensure_single().trigger_open()

    handle_line(controller, ":close")

    assert controller.target is None
    assert fake_transport.live() == []


def test_status_command_prints_json(controller, capsys):
    controller.set_target(API)

    handle_line(controller, ":status")

    status = orjson.loads(capsys.readouterr().out)
    assert status["name"] == "test"
    assert status["target"] == API
    assert status["state"] == "connecting"
