from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# ----- Board -----
DEFAULT_BOARD_W, DEFAULT_BOARD_H = 40, 20
MIN_BOARD_WIDTH, MIN_BOARD_HEIGHT = 4, 2   # smallest board that fits the starting snake
TERMINAL_WIDTH_MARGIN = 4
TERMINAL_HEIGHT_MARGIN = 6

# ----- Directions (dx, dy), y grows downwards -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Rules -----
INITIAL_LENGTH = 3
POINTS_PER_FOOD = 10
FOOD_PLACEMENT_ATTEMPTS_MULTIPLIER = 2

# ----- Timing -----
MICROSECONDS_PER_SECOND = 1_000_000
LOOP_SLEEP_S = 0.001


class GameMode(str, Enum):
    REGULAR = "regular"
    GREEDY = "greedy"


@dataclass(frozen=True)
class Symbols:
    wall: str
    head: str
    body: str
    food: str
    blank: str


ASCII_SYMBOLS = Symbols(wall="#", head="@", body="o", food="*", blank=" ")
# Emoji glyphs are double width, so the blank cell is two spaces.
EMOJI_SYMBOLS = Symbols(wall="\U0001f9f1", head="\U0001f40d", body="\U0001f7e2", food="\U0001f34e", blank="  ")


# ----- Tunables (what the command line can change) -----
@dataclass
class Config:
    board_width: int = DEFAULT_BOARD_W
    board_height: int = DEFAULT_BOARD_H
    render_fps: int = 30
    move_fps: int = 6
    wraparound: bool = False
    emoji: bool = False
    mode: GameMode = GameMode.REGULAR
    seed: Optional[int] = None   # None -> fresh entropy every game

    @property
    def render_interval(self) -> int:
        """Microseconds between two render ticks."""
        return MICROSECONDS_PER_SECOND // self.render_fps

    @property
    def move_interval(self) -> int:
        """Microseconds between two move ticks."""
        return MICROSECONDS_PER_SECOND // self.move_fps

    @property
    def capacity(self) -> int:
        return self.board_width * self.board_height

    @property
    def symbols(self) -> Symbols:
        return EMOJI_SYMBOLS if self.emoji else ASCII_SYMBOLS

    def validate(self) -> None:
        if self.board_width < MIN_BOARD_WIDTH:
            raise ValueError(f"Board width must be at least {MIN_BOARD_WIDTH}, got {self.board_width}")
        if self.board_height < MIN_BOARD_HEIGHT:
            raise ValueError(f"Board height must be at least {MIN_BOARD_HEIGHT}, got {self.board_height}")
        if self.render_fps <= 0:
            raise ValueError(f"Render FPS must be a positive integer, got {self.render_fps}")
        if self.move_fps <= 0:
            raise ValueError(f"Move FPS must be a positive integer, got {self.move_fps}")


def board_size_for_terminal(
    cfg: Config,
    width_override: Optional[int],
    height_override: Optional[int],
    terminal_size: Optional[Tuple[int, int]],
) -> Tuple[int, int]:
    """
    Pick the board dimensions for this run.

    Explicit overrides always win. Otherwise the board fills the terminal
    minus a margin for the border, status and footer lines; in emoji mode
    every cell takes two columns, so the derived width is halved. When the
    terminal size is unknown the current config values are kept.
    """
    width, height = cfg.board_width, cfg.board_height

    if width_override is not None:
        width = width_override
    elif terminal_size is not None:
        width = terminal_size[0] - TERMINAL_WIDTH_MARGIN
        if cfg.emoji:
            width //= 2
        width = max(width, MIN_BOARD_WIDTH)

    if height_override is not None:
        height = height_override
    elif terminal_size is not None:
        height = max(terminal_size[1] - TERMINAL_HEIGHT_MARGIN, MIN_BOARD_HEIGHT)

    return width, height
