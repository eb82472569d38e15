"""Command that starts a game in the terminal."""

from __future__ import annotations

import curses
import sys
from collections.abc import Sequence

from termtetris.config import Config
from termtetris.curses_terminal import CursesTerminalManager
from termtetris.game import Tetris


def _run(screen, config: Config) -> None:
    terminal = CursesTerminalManager(screen, Config.colors())
    tetris = Tetris(terminal, config.rotate_cw, config.rotate_ccw)
    tetris.play(lambda: terminal.get_user_input().keycode)


def main(argv: Sequence[str] | None = None) -> int:
    """Start a game with the two rotation keys given on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = Config(args)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 2
    curses.wrapper(_run, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())