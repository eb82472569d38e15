"""Drawing surfaces for the game: colors, user input and terminal managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

# Key codes as reported by curses.
KEY_ESCAPE = 27
KEY_DOWN = 258
KEY_UP = 259
KEY_LEFT = 260
KEY_RIGHT = 261
KEY_MOUSE = 409


@dataclass(frozen=True)
class Color:
    """An RGB color whose components each lie between 0 and 1."""

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        if not all(0.0 <= component <= 1.0 for component in (self.red, self.green, self.blue)):
            raise ValueError("Invalid value for color component. Must be between 0 and 1")


@dataclass
class UserInput:
    """A key press or mouse event read from the terminal."""

    keycode: int = 0
    mouse_row: int = -1
    mouse_col: int = -1

    def is_escape(self) -> bool:
        return self.keycode == KEY_ESCAPE

    def is_key_left(self) -> bool:
        return self.keycode == KEY_LEFT

    def is_key_right(self) -> bool:
        return self.keycode == KEY_RIGHT

    def is_key_up(self) -> bool:
        return self.keycode == KEY_UP

    def is_key_down(self) -> bool:
        return self.keycode == KEY_DOWN

    def is_mouseclick(self) -> bool:
        return self.mouse_row != -1


class TerminalManager(ABC):
    """Interface for drawing pixels and strings to a terminal."""

    @abstractmethod
    def draw_pixel(self, col_x: int, row_y: int, color: int) -> None:
        """Draw a pixel at the given position in the given color."""

    @abstractmethod
    def draw_string(self, col_x: int, row_y: int, color: int, text: str) -> None:
        """Draw a string at the given position in the given color."""

    @abstractmethod
    def refresh(self) -> None:
        """Show the drawn contents on screen."""

    @abstractmethod
    def num_rows(self) -> int:
        """Number of logical rows of the screen."""

    @abstractmethod
    def num_cols(self) -> int:
        """Number of logical columns of the screen."""


class MockTerminalManager(TerminalManager):
    """A terminal manager that records what was drawn instead of showing it."""

    def __init__(self, num_colors: int, num_rows: int, num_cols: int) -> None:
        self.num_colors = num_colors
        self._num_rows = num_rows
        self._num_cols = num_cols
        self._pixels: dict[tuple[int, int], int] = {}
        self._strings: dict[tuple[int, int], tuple[str, int]] = {}
        self.refresh_count = 0

    def draw_pixel(self, col_x: int, row_y: int, color: int) -> None:
        # Positions outside the screen are recorded too, as curses does not fail on them.
        self._pixels[col_x, row_y] = color

    def draw_string(self, col_x: int, row_y: int, color: int, text: str) -> None:
        self._strings[col_x, row_y] = (text, color)

    def refresh(self) -> None:
        """Count the refresh; nothing is shown on a recording terminal."""
        self.refresh_count += 1

    def num_rows(self) -> int:
        return self._num_rows

    def num_cols(self) -> int:
        return self._num_cols

    def is_pixel_drawn(self, col_x: int, row_y: int) -> bool:
        """True if the pixel holds a color other than the two background shades 0 and 1."""
        return self.pixel_color(col_x, row_y) > 1

    def pixel_color(self, col_x: int, row_y: int) -> int:
        return self._pixels.get((col_x, row_y), 0)

    def is_string_drawn(self, col_x: int, row_y: int) -> bool:
        return bool(self.string_at(col_x, row_y))

    def string_at(self, col_x: int, row_y: int) -> str:
        return self._strings.get((col_x, row_y), ("", 0))[0]

    def string_color(self, col_x: int, row_y: int) -> int:
        return self._strings.get((col_x, row_y), ("", 0))[1]