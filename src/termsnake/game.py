# game.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np  # type: ignore

from .config import (
    Config, GameMode,
    RIGHT,
    INITIAL_LENGTH, POINTS_PER_FOOD, FOOD_PLACEMENT_ATTEMPTS_MULTIPLIER,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# ---------- Helpers ----------
def is_opposite(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]

def step_position(pos: Position, direction: Tuple[int, int]) -> Position:
    return (pos[0] + direction[0], pos[1] + direction[1])

def wrap_position(pos: Position, width: int, height: int) -> Position:
    return ((pos[0] + width) % width, (pos[1] + height) % height)

def in_bounds(pos: Position, width: int, height: int) -> bool:
    return 0 <= pos[0] < width and 0 <= pos[1] < height

# ---------- Snake ----------
class Snake:
    """
    Snake body kept in a preallocated (capacity, 2) array.

    Rows 0..length-1 hold the occupied cells, head first. Rows past
    `length` are scratch space and never read.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"snake capacity must be positive, got {capacity}")
        self.body = np.zeros((capacity, 2), dtype=np.int64)
        self.length = 0

    @classmethod
    def from_cells(cls, cells: Sequence[Position], capacity: int) -> "Snake":
        if len(cells) > capacity:
            raise ValueError(f"{len(cells)} cells do not fit in capacity {capacity}")
        snake = cls(capacity)
        if cells:
            snake.body[:len(cells)] = np.asarray(cells, dtype=np.int64)
        snake.length = len(cells)
        return snake

    @property
    def capacity(self) -> int:
        return self.body.shape[0]

    @property
    def head(self) -> Position:
        x, y = self.body[0]
        return (int(x), int(y))

    def cells(self) -> List[Position]:
        return [(int(x), int(y)) for x, y in self.body[:self.length]]

    def occupies(self, pos: Position, start: int = 0) -> bool:
        """True if any cell at index >= start equals pos."""
        seg = self.body[start:self.length]
        return bool(np.any((seg[:, 0] == pos[0]) & (seg[:, 1] == pos[1])))

    def advance(self, new_head: Position, grow: bool) -> None:
        """Shift every cell one slot towards the tail and put new_head in front."""
        keep = self.length if grow else self.length - 1
        if keep > 0:
            self.body[1:keep + 1] = self.body[:keep].copy()
        self.body[0] = new_head
        if grow:
            self.length += 1

    def __len__(self) -> int:
        return self.length

# ---------- State ----------
@dataclass
class GameState:
    snake: Snake
    direction: Tuple[int, int]
    food: Position
    rng: np.random.Generator
    score: int = 0
    game_over: bool = False
    game_over_reason: Optional[str] = None
    paused: bool = False
    moves: int = 0   # successful move ticks so far

    def end(self, reason: str) -> None:
        """Mark the game as finished; the first reason recorded is kept."""
        if not self.game_over:
            self.game_over = True
            self.game_over_reason = reason
            logger.info("game over: %s (score=%d, length=%d)", reason, self.score, self.snake.length)

def new_game_state(cfg: Config, rng: Optional[np.random.Generator] = None) -> GameState:
    if rng is None:
        rng = np.random.default_rng(cfg.seed)
    cx, cy = cfg.board_width // 2, cfg.board_height // 2
    snake = Snake.from_cells(
        [(cx - i, cy) for i in range(INITIAL_LENGTH)],
        capacity=cfg.capacity,
    )
    state = GameState(snake=snake, direction=RIGHT, food=(-1, -1), rng=rng)
    place_food(state, cfg)
    return state

# ---------- Food ----------
def place_food(state: GameState, cfg: Config) -> bool:
    """
    Put the food on a random cell the snake does not occupy.

    Sampling is bounded; a full board or an unlucky run ends the game
    instead of spinning forever. Returns True on success.
    """
    total_cells = cfg.board_width * cfg.board_height
    if state.snake.length >= total_cells:
        state.end("board_full")
        return False

    max_attempts = total_cells * FOOD_PLACEMENT_ATTEMPTS_MULTIPLIER
    for _ in range(max_attempts):
        cand = (
            int(state.rng.integers(cfg.board_width)),
            int(state.rng.integers(cfg.board_height)),
        )
        if not state.snake.occupies(cand):
            state.food = cand
            return True

    logger.warning("no free cell found for food after %d attempts", max_attempts)
    state.end("no_free_cell")
    return False

# ---------- Update ----------
def change_direction(state: GameState, cand: Tuple[int, int]) -> bool:
    """Take a new heading unless it is a 180° turn. Return True if accepted."""
    if is_opposite(cand, state.direction):
        return False
    state.direction = cand
    return True

def toggle_pause(state: GameState) -> None:
    state.paused = not state.paused

def quit_game(state: GameState) -> None:
    state.end("quit")

def move_snake(state: GameState, cfg: Config) -> None:
    """
    Advance the snake one cell in its current direction.

    Every failure (wall, self, capacity, no room for food) only sets the
    game-over flag; when that happens before the commit the snake,
    score and food stay exactly as they were.
    """
    snake = state.snake
    new_head = step_position(snake.head, state.direction)

    # Walls
    if cfg.wraparound:
        new_head = wrap_position(new_head, cfg.board_width, cfg.board_height)
    elif not in_bounds(new_head, cfg.board_width, cfg.board_height):
        state.end("wall")
        return

    # Decided on the prospective head; collision below still wins
    ate_food = new_head == state.food

    # Self collision against the pre-move body, head excluded
    if snake.occupies(new_head, start=1):
        state.end("self")
        return

    # Move / grow
    if cfg.mode == GameMode.GREEDY:
        if snake.length >= snake.capacity:
            state.end("capacity")
            return
        snake.advance(new_head, grow=True)
    else:
        snake.advance(new_head, grow=ate_food)
    state.moves += 1

    if ate_food:
        state.score += POINTS_PER_FOOD
        place_food(state, cfg)
