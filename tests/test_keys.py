import pytest

from termsnake.config import UP, DOWN, LEFT, RIGHT
from termsnake.keys import read_command, apply_command, handle_input, QUIT, PAUSE


def byte_source(data: bytes):
    """Non-blocking reader over a fixed buffer: None once it is drained."""
    it = iter(data)
    return lambda: next(it, None)


@pytest.mark.parametrize("data, expected", [
    (b"w", UP), (b"W", UP),
    (b"a", LEFT), (b"A", LEFT),
    (b"s", DOWN), (b"S", DOWN),
    (b"d", RIGHT), (b"D", RIGHT),
    (b"q", QUIT), (b"Q", QUIT),
    (b" ", PAUSE),
])
def test_plain_keys(data, expected):
    assert read_command(byte_source(data)) == expected


@pytest.mark.parametrize("data, expected", [
    (b"\x1b[A", UP),
    (b"\x1b[B", DOWN),
    (b"\x1b[C", RIGHT),
    (b"\x1b[D", LEFT),
])
def test_arrow_sequences(data, expected):
    assert read_command(byte_source(data)) == expected


@pytest.mark.parametrize("data", [b"", b"x", b"\x1b", b"\x1b[", b"\x1b[Z", b"\x1bOA"])
def test_nothing_or_unknown_decodes_to_none(data):
    assert read_command(byte_source(data)) is None


def test_one_key_per_call():
    read = byte_source(b"wd")
    assert read_command(read) == UP
    assert read_command(read) == RIGHT
    assert read_command(read) is None


def test_partial_escape_is_dropped():
    read = byte_source(b"\x1b[")
    assert read_command(read) is None
    assert read() is None


def test_arrow_after_plain_key_waits_for_next_call():
    read = byte_source(b"s\x1b[D")
    assert read_command(read) == DOWN
    assert read_command(read) == LEFT


class TestApply:
    def test_reversal_rejected(self, make_state):
        state = make_state([(5, 5), (4, 5), (3, 5)], direction=RIGHT)
        handle_input(state, byte_source(b"a"))
        assert state.direction == RIGHT

    def test_turn_accepted(self, make_state):
        state = make_state([(5, 5), (4, 5), (3, 5)], direction=RIGHT)
        handle_input(state, byte_source(b"\x1b[A"))
        assert state.direction == UP

    def test_quit_sets_game_over(self, make_state):
        state = make_state([(5, 5), (4, 5), (3, 5)])
        assert handle_input(state, byte_source(b"Q")) == QUIT
        assert state.game_over
        assert state.game_over_reason == "quit"

    def test_space_toggles_pause(self, make_state):
        state = make_state([(5, 5), (4, 5), (3, 5)])
        read = byte_source(b"  ")
        handle_input(state, read)
        assert state.paused
        handle_input(state, read)
        assert not state.paused

    def test_none_is_noop(self, make_state):
        state = make_state([(5, 5), (4, 5), (3, 5)], direction=RIGHT)
        apply_command(state, None)
        assert state.direction == RIGHT
        assert not state.paused
        assert not state.game_over
