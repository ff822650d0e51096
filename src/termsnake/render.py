# render.py
from typing import List

from .config import Config
from .game import GameState
from .terminal import CURSOR_HOME, CLEAR_TO_EOL

FOOTER = "Use WASD or arrow keys to move, SPACE to pause, Q to quit"


def status_line(state: GameState) -> str:
    if state.paused:
        return f"Score: {state.score} - PAUSED (Press SPACE to resume)"
    return f"Score: {state.score}"


def board_rows(state: GameState, cfg: Config) -> List[str]:
    """The board with its border, one string per terminal row."""
    sym = cfg.symbols
    w, h = cfg.board_width, cfg.board_height
    grid = [[sym.blank] * w for _ in range(h)]

    # lowest priority first: food < body < head
    fx, fy = state.food
    if 0 <= fx < w and 0 <= fy < h:
        grid[fy][fx] = sym.food
    cells = state.snake.cells()
    for x, y in cells[1:]:
        grid[y][x] = sym.body
    if cells:
        hx, hy = cells[0]
        grid[hy][hx] = sym.head

    wall_row = sym.wall * (w + 2)
    rows = [wall_row]
    rows.extend(sym.wall + "".join(row) + sym.wall for row in grid)
    rows.append(wall_row)
    return rows


def render_frame(state: GameState, cfg: Config) -> str:
    """
    One full frame. Starts from the home position instead of clearing, so
    the previous frame is overwritten in place without flicker.
    """
    lines = [status_line(state) + CLEAR_TO_EOL, ""]
    lines.extend(board_rows(state, cfg))
    lines.extend(["", FOOTER])
    return CURSOR_HOME + "\n".join(lines) + "\n"


def draw_game(terminal, state: GameState, cfg: Config) -> None:
    terminal.write(render_frame(state, cfg))
