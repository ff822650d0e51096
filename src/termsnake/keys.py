# keys.py
from typing import Callable, Optional, Tuple, Union

from .config import UP, DOWN, LEFT, RIGHT
from .game import GameState, change_direction, toggle_pause, quit_game

ESC = 0x1B

QUIT = "quit"
PAUSE = "pause"

Command = Union[Tuple[int, int], str]

KEY_TO_COMMAND = {
    ord("w"): UP, ord("W"): UP,
    ord("s"): DOWN, ord("S"): DOWN,
    ord("a"): LEFT, ord("A"): LEFT,
    ord("d"): RIGHT, ord("D"): RIGHT,
    ord("q"): QUIT, ord("Q"): QUIT,
    ord(" "): PAUSE,
}

# Final byte of the ANSI arrow sequences ESC [ A..D
ARROW_TO_DIR = {
    ord("A"): UP,
    ord("B"): DOWN,
    ord("C"): RIGHT,
    ord("D"): LEFT,
}


def read_command(read_byte: Callable[[], Optional[int]]) -> Optional[Command]:
    """
    Decode at most one key press from a non-blocking byte source.

    An escape sequence has to be complete in the same poll; whatever part
    of it has already been read is dropped otherwise. Unknown keys decode
    to None.
    """
    ch = read_byte()
    if ch is None:
        return None
    if ch != ESC:
        return KEY_TO_COMMAND.get(ch)

    if read_byte() != ord("["):
        return None
    final = read_byte()
    if final is None:
        return None
    return ARROW_TO_DIR.get(final)


def apply_command(state: GameState, cmd: Optional[Command]) -> None:
    if cmd is None:
        return
    if cmd == QUIT:
        quit_game(state)
    elif cmd == PAUSE:
        toggle_pause(state)
    else:
        change_direction(state, cmd)


def handle_input(state: GameState, read_byte: Callable[[], Optional[int]]) -> Optional[Command]:
    """Read and apply one command (no 180° turns). Returns what was applied."""
    cmd = read_command(read_byte)
    apply_command(state, cmd)
    return cmd
