"""A terminal manager that draws with curses."""

from __future__ import annotations

import contextlib
import curses
from collections.abc import Sequence

from termtetris.terminal import Color, TerminalManager, UserInput

# Color slots and pairs below this number are left to the terminal itself.
SYSTEM_COLORS = 16


def _curses_level(component: float) -> int:
    return int(1000 * component)


class CursesTerminalManager(TerminalManager):
    """Draws two-character-wide pixels and text on a curses screen.

    The screen is expected to be initialised already (for example by
    ``curses.wrapper``), which also restores the terminal afterwards.
    Each entry of ``colors`` is a (foreground, background) pair; its index
    is the color number passed to ``draw_pixel`` and ``draw_string``.
    """

    def __init__(self, screen, colors: Sequence[tuple[Color, Color]]) -> None:
        self._screen = screen
        self._num_colors = len(colors)

        curses.cbreak()
        curses.noecho()
        with contextlib.suppress(curses.error):
            curses.curs_set(0)
        screen.nodelay(True)
        screen.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
        curses.mouseinterval(0)

        curses.start_color()
        if curses.COLORS - SYSTEM_COLORS < len(colors) * 2:
            raise RuntimeError(
                "The TerminalManager requires a terminal with at least 200 colors. "
                "Consider setting `TERM=xterm-256color` before starting the application"
            )
        for index, (foreground, background) in enumerate(colors):
            fg_slot = 2 * (SYSTEM_COLORS + index)
            bg_slot = fg_slot + 1
            self._define_color(fg_slot, foreground)
            self._define_color(bg_slot, background)
            curses.init_pair(SYSTEM_COLORS + index, fg_slot, bg_slot)

        rows, cols = screen.getmaxyx()
        self._num_rows = rows
        self._num_cols = cols // 2

    @staticmethod
    def _define_color(slot: int, color: Color) -> None:
        curses.init_color(
            slot,
            _curses_level(color.red),
            _curses_level(color.green),
            _curses_level(color.blue),
        )

    def _attribute(self, color: int, what: str) -> int:
        if color >= self._num_colors:
            raise ValueError(f"Invalid color given to {what}")
        return curses.color_pair(color + SYSTEM_COLORS)

    def _write(self, row_y: int, col_x: int, text: str, attribute: int) -> None:
        # Writing off screen is silently ignored, as plain curses printing does.
        with contextlib.suppress(curses.error):
            self._screen.addstr(row_y, 2 * col_x, text, attribute)

    def draw_pixel(self, col_x: int, row_y: int, color: int) -> None:
        """Draw a pixel in the foreground color of the given color pair."""
        attribute = self._attribute(color, "drawPixel") | curses.A_REVERSE
        self._write(row_y, col_x, "  ", attribute)

    def draw_string(self, col_x: int, row_y: int, color: int, text: str) -> None:
        attribute = self._attribute(color, "drawString")
        self._write(row_y, col_x, text, attribute)

    def refresh(self) -> None:
        self._screen.refresh()

    def num_rows(self) -> int:
        return self._num_rows

    def num_cols(self) -> int:
        return self._num_cols

    def get_user_input(self) -> UserInput:
        """Read one key without waiting; a left click also fills in its cell."""
        user_input = UserInput(keycode=self._screen.getch())
        if user_input.keycode == curses.KEY_MOUSE:
            try:
                _, x, y, _, state = curses.getmouse()
            except curses.error:
                return user_input
            if state & curses.BUTTON1_PRESSED:
                user_input.mouse_row = y
                user_input.mouse_col = x // 2
        return user_input