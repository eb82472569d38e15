"""Game state, rules and rendering of the falling-block puzzle."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from typing import Protocol

from termtetris.playfield import HEIGHT, WIDTH, Playfield
from termtetris.terminal import KEY_DOWN, KEY_LEFT, KEY_RIGHT, TerminalManager
from termtetris.tetromino import Shape, Tetromino

DISTANCE_TO_TOP = 2
DISTANCE_TO_SIDE = 2

# Frames a piece waits before falling one cell, by level (0 to 30).
SPEEDS = (
    48, 43, 38, 33, 28, 23, 18, 13, 8, 6,
    5, 5, 5, 4, 4, 4, 3, 3, 3, 2,
    2, 2, 2, 2, 2, 2, 2, 2, 2, 1,
    1,
)

# Seconds between two frames; tuned so that pieces fall at the intended pace.
FRAME_SECONDS = 0.01455
GAME_OVER_PAUSE = 3.5

_LINE_SCORES = {1: 40, 2: 100, 3: 300, 4: 1200}

_KEY_PAUSE = ord("p")
_KEY_QUIT = ord("q")
_KEY_HARD_DROP = ord(" ")

_TEXT_COLOR = 9
_START_COLOR = 8
_BORDER_COLOR = 10
_SIDE_PANEL_X = WIDTH + 2 + DISTANCE_TO_SIDE
_FRAMES_IN_SPEED_TEST = 1000


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def frames_per_gridcell(level: int) -> int:
    """Frames between two automatic falls at the given level."""
    if level < 0:
        raise ValueError("Level must not be negative")
    return SPEEDS[min(level, 29)]


class Tetris:
    """One game: a playfield, the falling piece, the next piece and the score."""

    def __init__(
        self,
        terminal: TerminalManager,
        key_rotate_cw: int,
        key_rotate_ccw: int,
        rng: _RandomSource | None = None,
    ) -> None:
        self.terminal = terminal
        self.key_rotate_cw = key_rotate_cw
        self.key_rotate_ccw = key_rotate_ccw
        self.rng: _RandomSource = rng if rng is not None else random.Random()
        self.playfield = Playfield()
        self.current_tetromino: Tetromino | None = None
        self.next_tetromino: Tetromino | None = None
        self.score = 0
        self.level = 0
        self.lines_cleared = 0
        self.is_running = True
        self.game_over = False

    def _piece(self) -> Tetromino:
        if self.current_tetromino is None:
            raise RuntimeError("No active tetromino")
        return self.current_tetromino

    def play(self, read_key: Callable[[], int]) -> None:
        """Run the game loop, reading one key code per frame, until quit or game over."""
        frame = 0
        self.current_tetromino = Tetromino(Shape(self.rng.randrange(7)))
        self.next_tetromino = Tetromino(
            self.generate_new_tetromino_type(self.current_tetromino.shape)
        )
        self.draw_border()
        self.draw_game()
        self.terminal.refresh()
        self.draw_count_down()
        while self.process_user_input(read_key()) and not self.game_over:
            if frame % frames_per_gridcell(self.level) == 0:
                self.update()
            self.draw_game()
            frame += 1
            time.sleep(FRAME_SECONDS)
        self.playfield.clear()
        self.draw_field()
        self.terminal.draw_string(5, 8, _TEXT_COLOR, "Game Over!")
        self.terminal.refresh()
        time.sleep(GAME_OVER_PAUSE)

    def process_user_input(self, keycode: int) -> bool:
        """Apply one key press; return False when the player quits."""
        if self.is_running:
            if keycode == KEY_LEFT and self._piece().can_move_left(self.playfield):
                self._piece().move_left()
            elif keycode == KEY_RIGHT and self._piece().can_move_right(self.playfield):
                self._piece().move_right()
            elif keycode == KEY_DOWN and self._piece().can_move_down(self.playfield):
                self._piece().move_down()
                self.score += 1
            elif keycode == self.key_rotate_ccw:
                self._piece().rotate_ccw(self.playfield)
            elif keycode == self.key_rotate_cw:
                self._piece().rotate_cw(self.playfield)
            elif keycode == _KEY_HARD_DROP:
                self.score += self._piece().hard_drop(self.playfield)
        if keycode == _KEY_PAUSE:
            self.is_running = not self.is_running
        return keycode != _KEY_QUIT

    def _spawn_overlaps(self) -> bool:
        piece = self._piece()
        return any(
            filled and self.playfield.cell(piece.x + dx, piece.y + dy) != 0
            for dy, row in enumerate(piece.blocks)
            for dx, filled in enumerate(row)
        )

    def update(self) -> None:
        """Advance one gravity step: lock, clear lines, score, spawn and fall."""
        if not self.is_running:
            return
        if not self._piece().can_move_down(self.playfield):
            self.playfield.lock_tetromino(self._piece())
            cleared = self.playfield.clear_full_rows()
            self.lines_cleared += cleared
            self.score += _LINE_SCORES.get(cleared, 0) * (self.level + 1)
            self.current_tetromino = self.next_tetromino
            self.next_tetromino = Tetromino(
                self.generate_new_tetromino_type(self._piece().shape)
            )
            if self._spawn_overlaps():
                self.game_over = True
                return
        if self.lines_cleared >= 10:
            self.level += 1
            self.lines_cleared %= 10
        piece = self._piece()
        if piece.can_move_down(self.playfield):
            piece.move_down()

    def generate_new_tetromino_type(self, shape: Shape) -> Shape:
        """Pick a random shape, drawing once more if it repeats the given one."""
        new_shape = Shape(self.rng.randrange(7))
        if new_shape == shape:
            new_shape = Shape(self.rng.randrange(7))
        return new_shape

    def draw_game(self) -> None:
        self.draw_field()
        self.draw_game_data()
        self.draw_next_tetromino()

    def draw_field(self) -> None:
        """Draw the visible playfield as a checkered grid, then the falling piece."""
        for x in range(WIDTH):
            for y in range(2, HEIGHT):
                value = self.playfield.cell(x, y)
                color = value if value != 0 else (x + y) % 2
                self.terminal.draw_pixel(x + DISTANCE_TO_SIDE, y + DISTANCE_TO_TOP, color)
        piece = self.current_tetromino
        if piece is None:
            return
        for dy, row in enumerate(piece.blocks):
            for dx, filled in enumerate(row):
                if filled and piece.y + dy >= 2:
                    self.terminal.draw_pixel(
                        piece.x + dx + DISTANCE_TO_SIDE,
                        piece.y + dy + DISTANCE_TO_TOP,
                        piece.color,
                    )

    def draw_game_data(self) -> None:
        """Draw the score, level and lines cleared."""
        self.terminal.draw_string(_SIDE_PANEL_X, 10, _TEXT_COLOR, f"Score: {self.score}")
        self.terminal.draw_string(WIDTH // 2, 1, _TEXT_COLOR, f"Level: {self.level}")
        self.terminal.draw_string(
            _SIDE_PANEL_X, 12, _TEXT_COLOR, f"Lines cleared: {self.lines_cleared}"
        )

    def draw_next_tetromino(self) -> None:
        """Draw the preview of the next piece beside the field."""
        piece = self.next_tetromino
        if piece is None:
            return
        self.terminal.draw_string(_SIDE_PANEL_X, 4, _TEXT_COLOR, "Next:")
        for y in range(4):
            for x in range(4):
                self.terminal.draw_pixel(_SIDE_PANEL_X + x, 5 + y, 0)
        for dy, row in enumerate(piece.blocks):
            for dx, filled in enumerate(row):
                if filled:
                    self.terminal.draw_pixel(_SIDE_PANEL_X + dx, 5 + dy, piece.color)

    def draw_border(self) -> None:
        """Draw the left, right and bottom walls around the field."""
        for x in range(1, WIDTH + 3):
            for y in range(3, 25):
                if x in (1, 12) or y == 24:
                    self.terminal.draw_pixel(x, y, _BORDER_COLOR)

    def draw_count_down(self) -> None:
        """Count down from three before the game starts."""
        col, row = WIDTH // 2 + 1, HEIGHT // 2 + 2
        for text, color, pause in (
            ("- 3 -", _TEXT_COLOR, 1.0),
            ("- 2 -", _TEXT_COLOR, 1.0),
            ("- 1 -", _TEXT_COLOR, 1.0),
            ("START", _START_COLOR, 0.8),
        ):
            self.terminal.draw_string(col, row, color, text)
            self.terminal.refresh()
            time.sleep(pause)

    def create_test_tetrominos(self) -> None:
        """Set a known falling piece (I) and next piece (O)."""
        self.current_tetromino = Tetromino(Shape.I)
        self.next_tetromino = Tetromino(Shape.O)

    def time_between_updates(self, level: int) -> float:
        """Run frames at the level's pace and return the mean seconds between updates."""
        self.create_test_tetrominos()
        frames = frames_per_gridcell(level)
        total = 0.0
        updates = 0
        last = time.perf_counter()
        for frame in range(_FRAMES_IN_SPEED_TEST):
            if frame % frames == 0:
                now = time.perf_counter()
                total += now - last
                last = now
                self.update()
                updates += 1
            time.sleep(FRAME_SECONDS)
        return total / updates