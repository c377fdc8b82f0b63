"""Tests for connection state definitions."""

from stablesocket.connection_state import ConnectionState


def test_live_states():
    assert ConnectionState.CONNECTING.is_live
    assert ConnectionState.OPEN.is_live
    assert not ConnectionState.CLOSED.is_live
    assert not ConnectionState.UNINITIALIZED.is_live


def test_values_are_lowercase_names():
    assert [state.value for state in ConnectionState] == ["uninitialized", "connecting", "open", "closed"]
