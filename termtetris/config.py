"""Command-line settings and the color palette of the game."""

from __future__ import annotations

from collections.abc import Sequence

from termtetris.terminal import Color

USAGE = "Usage: tetris <rotate_counterclockwise_key> <rotate_clockwise_key>"

BLACK = Color(0.0, 0.0, 0.0)
BLACK2 = Color(0.1, 0.1, 0.1)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.25, 0.25, 1.0)
YELLOW = Color(1.0, 1.0, 0.0)
CYAN = Color(0.0, 1.0, 1.0)
MAGENTA = Color(1.0, 0.0, 1.0)
ORANGE = Color(1.0, 0.5, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
GRAY = Color(0.5, 0.5, 0.5)

# Indexed by the color numbers the game draws with: 0 and 1 are the grid
# shades, 2 to 8 the pieces, 9 the text and 10 the border.
_PALETTE: tuple[tuple[Color, Color], ...] = (
    (BLACK, BLACK),
    (BLACK2, BLACK),
    (RED, BLACK),
    (GREEN, BLACK),
    (YELLOW, BLACK),
    (BLUE, BLACK),
    (MAGENTA, BLACK),
    (CYAN, BLACK),
    (ORANGE, BLACK),
    (WHITE, BLACK),
    (GRAY, BLACK),
)


class Config:
    """Rotation keys taken from the command-line arguments (program name excluded)."""

    def __init__(self, argv: Sequence[str]) -> None:
        if len(argv) != 2 or not all(argv):
            raise ValueError(USAGE)
        self.rotate_ccw = ord(argv[0][0])
        self.rotate_cw = ord(argv[1][0])

    @staticmethod
    def colors() -> list[tuple[Color, Color]]:
        """The (foreground, background) pairs the game draws with."""
        return list(_PALETTE)