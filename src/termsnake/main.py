# main.py
from __future__ import annotations

import argparse
import logging
import signal
import sys
import time
from typing import Callable, List, Optional

from .clock import MonotonicClock
from .config import Config, GameMode, LOOP_SLEEP_S, MIN_BOARD_WIDTH, MIN_BOARD_HEIGHT, board_size_for_terminal
from .game import GameState, new_game_state, move_snake
from .keys import handle_input
from .render import draw_game
from .terminal import Terminal, TerminalError, terminal_size

logger = logging.getLogger(__name__)

EPILOG = """\
Note: For best visual experience, use a width:height ratio of approximately 2:1
      (e.g., -w 40 -h 20 or -w 60 -h 30)
      Higher render FPS makes input more responsive, higher move FPS makes game faster
      Default mode: hitting walls causes death. Use --wraparound to pass through walls
      Game modes: regular (classic snake), greedy (grows every move, find shortest path!)
"""


# --------------------------
# Game loop
# --------------------------
def run_game(
    state: GameState,
    cfg: Config,
    terminal,
    clock=None,
    sleep: Callable[[float], None] = time.sleep,
) -> GameState:
    """
    Drive the game until it is over.

    Every iteration samples the clock, handles at most one key, then fires
    the move tick and the render tick independently when their interval
    has elapsed. A missed tick is not caught up: the timer restarts from
    the moment it fired.
    """
    if clock is None:
        clock = MonotonicClock()
    move_interval = cfg.move_interval
    render_interval = cfg.render_interval
    last_move = 0
    last_render = 0

    while not state.game_over:
        # 1) time
        elapsed = clock.elapsed_us()

        # 2) input
        handle_input(state, terminal.read_byte)

        # 3) update (paused only freezes movement)
        if elapsed - last_move >= move_interval and not state.paused:
            move_snake(state, cfg)
            last_move = elapsed

        # 4) render
        if elapsed - last_render >= render_interval:
            draw_game(terminal, state, cfg)
            last_render = elapsed

        sleep(LOOP_SLEEP_S)

    return state


# --------------------------
# Command line
# --------------------------
def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    # -h is the board height, so argparse's own -h/--help is replaced by --help
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Snake in the terminal.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-w", dest="width", metavar="WIDTH", type=positive_int, default=None,
                        help="Set board width (default: terminal width)")
    parser.add_argument("-h", dest="height", metavar="HEIGHT", type=positive_int, default=None,
                        help="Set board height (default: terminal height)")
    parser.add_argument("-r", dest="render_fps", metavar="FPS", type=positive_int, default=30,
                        help="Set render frequency in FPS (default: 30)")
    parser.add_argument("-m", dest="move_fps", metavar="FPS", type=positive_int, default=6,
                        help="Set move frequency in FPS (default: 6)")
    parser.add_argument("--mode", type=GameMode, default=GameMode.REGULAR,
                        choices=list(GameMode), metavar="MODE",
                        help="Set game mode: regular, greedy (default: regular)")
    parser.add_argument("--wraparound", action="store_true",
                        help="Enable wraparound mode (walls teleport to opposite side)")
    parser.add_argument("--emoji", action="store_true",
                        help="Enable emoji mode (use emojis for game elements)")
    parser.add_argument("--log-file", default=None, metavar="PATH",
                        help="Write a debug log to PATH (nothing is logged otherwise)")
    parser.add_argument("--help", action="help", default=argparse.SUPPRESS,
                        help="Show this help message")
    return parser


def config_from_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    size=None,
) -> Config:
    """Build the run's Config; `size` is the terminal (columns, rows) or None."""
    if args.width is not None and args.width < MIN_BOARD_WIDTH:
        parser.error(f"-w: board width must be at least {MIN_BOARD_WIDTH}")
    if args.height is not None and args.height < MIN_BOARD_HEIGHT:
        parser.error(f"-h: board height must be at least {MIN_BOARD_HEIGHT}")

    cfg = Config(
        render_fps=args.render_fps,
        move_fps=args.move_fps,
        wraparound=args.wraparound,
        emoji=args.emoji,
        mode=args.mode,
    )
    cfg.board_width, cfg.board_height = board_size_for_terminal(cfg, args.width, args.height, size)
    try:
        cfg.validate()
    except ValueError as e:
        parser.error(str(e))
    return cfg


def _raise_exit(signum, frame):
    raise SystemExit(128 + signum)


# --------------------------
# Main
# --------------------------
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    cfg = config_from_args(args, parser, terminal_size())
    logger.info(
        "starting: board=%dx%d render=%dfps move=%dfps mode=%s wraparound=%s emoji=%s",
        cfg.board_width, cfg.board_height, cfg.render_fps, cfg.move_fps,
        cfg.mode.value, cfg.wraparound, cfg.emoji,
    )

    # SIGTERM unwinds through the `with` below so the terminal is restored
    signal.signal(signal.SIGTERM, _raise_exit)

    state = new_game_state(cfg)
    try:
        with Terminal() as term:
            try:
                run_game(state, cfg, term)
            except KeyboardInterrupt:
                term.clear()
                term.show_cursor()
                term.write(f"Interrupted. Final Score: {state.score}\n")
                return 130

            term.clear()
            term.show_cursor()
            term.write(f"Game Over! Final Score: {state.score}\n")
            term.write("Press any key to exit...")
            try:
                term.wait_key()
            except KeyboardInterrupt:
                term.write("\n")
                return 130
            term.write("\n")
    except TerminalError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
