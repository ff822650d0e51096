import numpy as np  # type: ignore
import pytest

from termsnake.config import Config, RIGHT
from termsnake.game import GameState, Snake


@pytest.fixture
def cfg():
    return Config(board_width=10, board_height=10, seed=0)


@pytest.fixture
def make_state(cfg):
    """Build a GameState with the snake exactly where the test wants it."""
    def _make(cells, direction=RIGHT, food=(0, 0), config=None, capacity=None):
        config = config or cfg
        snake = Snake.from_cells(cells, capacity or config.capacity)
        return GameState(
            snake=snake,
            direction=direction,
            food=food,
            rng=np.random.default_rng(0),
        )
    return _make
