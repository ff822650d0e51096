import pytest

from termsnake.config import (
    Config,
    ASCII_SYMBOLS, EMOJI_SYMBOLS,
    MIN_BOARD_WIDTH, MIN_BOARD_HEIGHT,
    board_size_for_terminal,
)


def test_intervals_truncate_to_whole_microseconds():
    cfg = Config(render_fps=30, move_fps=6)
    assert cfg.render_interval == 33333
    assert cfg.move_interval == 166666


def test_capacity_is_board_area():
    assert Config(board_width=12, board_height=7).capacity == 84


def test_symbols_follow_emoji_flag():
    assert Config().symbols is ASCII_SYMBOLS
    assert Config(emoji=True).symbols is EMOJI_SYMBOLS


@pytest.mark.parametrize("kwargs", [
    {"board_width": MIN_BOARD_WIDTH - 1},
    {"board_height": MIN_BOARD_HEIGHT - 1},
    {"render_fps": 0},
    {"move_fps": -3},
])
def test_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs).validate()


def test_validate_accepts_defaults():
    Config().validate()


class TestBoardSize:
    def test_fills_terminal_minus_margins(self):
        assert board_size_for_terminal(Config(), None, None, (80, 24)) == (76, 18)

    def test_emoji_halves_width(self):
        assert board_size_for_terminal(Config(emoji=True), None, None, (80, 24)) == (38, 18)

    def test_overrides_win(self):
        assert board_size_for_terminal(Config(), 30, 12, (80, 24)) == (30, 12)
        assert board_size_for_terminal(Config(emoji=True), 30, None, (80, 24)) == (30, 18)

    def test_unknown_terminal_keeps_defaults(self):
        assert board_size_for_terminal(Config(), None, None, None) == (40, 20)
        assert board_size_for_terminal(Config(), None, 9, None) == (40, 9)

    def test_tiny_terminal_is_clamped(self):
        assert board_size_for_terminal(Config(), None, None, (5, 5)) == (MIN_BOARD_WIDTH, MIN_BOARD_HEIGHT)
