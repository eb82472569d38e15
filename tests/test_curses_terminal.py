import curses
from contextlib import ExitStack, contextmanager
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from termtetris.curses_terminal import SYSTEM_COLORS, CursesTerminalManager
from termtetris.terminal import KEY_LEFT, Color


class FakeScreen:
    def __init__(self, rows=30, cols=60, keys=(), fail_writes=False):
        self.rows = rows
        self.cols = cols
        self.keys = list(keys)
        self.fail_writes = fail_writes
        self.writes = []
        self.refreshes = 0
        self.nodelay_flag = None
        self.keypad_flag = None

    def getmaxyx(self):
        return self.rows, self.cols

    def nodelay(self, flag):
        self.nodelay_flag = flag

    def keypad(self, flag):
        self.keypad_flag = flag

    def addstr(self, y, x, text, attr=0):
        self.writes.append((y, x, text, attr))
        if self.fail_writes:
            raise curses.error("off screen")

    def refresh(self):
        self.refreshes += 1

    def getch(self):
        return self.keys.pop(0) if self.keys else -1


@contextmanager
def curses_patched(num_colors=256):
    init_color = MagicMock()
    init_pair = MagicMock()
    with ExitStack() as stack:
        stack.enter_context(patch("curses.cbreak"))
        stack.enter_context(patch("curses.noecho"))
        stack.enter_context(patch("curses.curs_set"))
        stack.enter_context(patch("curses.mousemask"))
        stack.enter_context(patch("curses.mouseinterval"))
        stack.enter_context(patch("curses.start_color"))
        stack.enter_context(patch("curses.COLORS", num_colors, create=True))
        stack.enter_context(patch("curses.init_color", init_color))
        stack.enter_context(patch("curses.init_pair", init_pair))
        stack.enter_context(patch("curses.color_pair", side_effect=lambda n: n << 8))
        yield SimpleNamespace(init_color=init_color, init_pair=init_pair)


BLACK = Color(0.0, 0.0, 0.0)
RED = Color(1.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
COLORS = [(BLACK, BLACK), (RED, BLACK), (WHITE, BLACK)]


def make_terminal(screen=None, colors=COLORS):
    screen = screen or FakeScreen()
    return screen, CursesTerminalManager(screen, colors)


def test_dimensions_use_two_columns_per_pixel():
    with curses_patched():
        screen, terminal = make_terminal(FakeScreen(rows=30, cols=61))
    assert terminal.num_rows() == 30
    assert terminal.num_cols() == 61 // 2
    assert screen.nodelay_flag is True
    assert screen.keypad_flag is True


def test_each_color_pair_gets_its_foreground_and_background():
    with curses_patched() as mocks:
        screen, terminal = make_terminal(colors=[(RED, WHITE)])
        terminal.draw_pixel(2, 3, 0)
    defined = {c.args[0]: c.args[1:] for c in mocks.init_color.call_args_list}
    assert mocks.init_pair.call_count == 1
    pair, fg, bg = mocks.init_pair.call_args.args
    assert pair == SYSTEM_COLORS
    assert defined[fg] == (1000, 0, 0)
    assert defined[bg] == (1000, 1000, 1000)
    assert screen.writes == [(3, 4, "  ", (pair << 8) | curses.A_REVERSE)]


def test_too_few_terminal_colors_is_an_error():
    with curses_patched(num_colors=SYSTEM_COLORS + 2 * len(COLORS) - 1):
        with pytest.raises(RuntimeError, match="at least 200 colors"):
            make_terminal()


def test_exactly_enough_colors_is_accepted():
    with curses_patched(num_colors=SYSTEM_COLORS + 2 * len(COLORS)) as mocks:
        make_terminal()
    assert mocks.init_pair.call_count == len(COLORS)


def test_draw_pixel_is_reversed_version_of_text_attribute():
    with curses_patched():
        screen, terminal = make_terminal()
        terminal.draw_string(3, 4, 2, "x")
        terminal.draw_pixel(3, 4, 2)
    (text_y, text_x, text, text_attr), (y, x, pixel, pixel_attr) = screen.writes
    assert (text_y, text_x, text) == (4, 6, "x")
    assert (y, x, pixel) == (4, 6, "  ")
    assert pixel_attr == text_attr | curses.A_REVERSE


def test_different_colors_use_different_pairs():
    with curses_patched():
        screen, terminal = make_terminal()
        terminal.draw_pixel(0, 0, 1)
        terminal.draw_pixel(0, 0, 2)
    assert screen.writes[0][3] != screen.writes[1][3]
    assert screen.writes[0][2] == screen.writes[1][2] == "  "


def test_invalid_colors_are_rejected():
    with curses_patched():
        screen, terminal = make_terminal()
        with pytest.raises(ValueError, match="drawPixel"):
            terminal.draw_pixel(0, 0, len(COLORS))
        with pytest.raises(ValueError, match="drawString"):
            terminal.draw_string(0, 0, len(COLORS), "x")
    assert screen.writes == []


def test_writing_off_screen_is_ignored():
    with curses_patched():
        screen, terminal = make_terminal(FakeScreen(fail_writes=True))
        terminal.draw_pixel(100, 100, 1)
        terminal.draw_string(100, 100, 1, "far away")
    assert len(screen.writes) == 2


def test_refresh_refreshes_screen():
    with curses_patched():
        screen, terminal = make_terminal()
        terminal.refresh()
        terminal.refresh()
    assert screen.refreshes == 2


def test_get_user_input_reads_keys():
    with curses_patched():
        _, terminal = make_terminal(FakeScreen(keys=[KEY_LEFT]))
        first = terminal.get_user_input()
        second = terminal.get_user_input()
    assert first.is_key_left()
    assert not first.is_mouseclick()
    assert second.keycode == -1


def test_left_click_reports_cell():
    with curses_patched():
        _, terminal = make_terminal(FakeScreen(keys=[curses.KEY_MOUSE]))
        with patch("curses.getmouse", return_value=(0, 11, 7, 0, curses.BUTTON1_PRESSED)):
            user_input = terminal.get_user_input()
    assert user_input.is_mouseclick()
    assert user_input.mouse_row == 7
    assert user_input.mouse_col == 11 // 2


def test_mouse_event_without_left_press_is_not_a_click():
    with curses_patched():
        _, terminal = make_terminal(FakeScreen(keys=[curses.KEY_MOUSE, curses.KEY_MOUSE]))
        with patch("curses.getmouse", return_value=(0, 11, 7, 0, 0)):
            released = terminal.get_user_input()
        with patch("curses.getmouse", side_effect=curses.error("no event")):
            failed = terminal.get_user_input()
    assert released.keycode == curses.KEY_MOUSE
    assert not released.is_mouseclick()
    assert not failed.is_mouseclick()
    assert failed.mouse_col == -1