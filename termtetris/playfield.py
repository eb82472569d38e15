"""The grid of locked blocks."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

WIDTH = 10
HEIGHT = 22


class _Piece(Protocol):
    blocks: list[list[bool]]
    x: int
    y: int
    color: int


class Playfield:
    """A 10 by 22 grid; 0 is an empty cell, any other value is the color of a block."""

    def __init__(self) -> None:
        self._columns = [[0] * HEIGHT for _ in range(WIDTH)]

    @staticmethod
    def _check(x: int, y: int) -> None:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise IndexError("Invalid playfield coordinates")

    def cell(self, x: int, y: int) -> int:
        """Return the value at column x, row y."""
        self._check(x, y)
        return self._columns[x][y]

    def set_cell(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        self._columns[x][y] = value

    def is_row_full(self, row: int) -> bool:
        self._check(0, row)
        return all(column[row] != 0 for column in self._columns)

    def clear_row(self, row: int) -> None:
        """Remove a row, shifting everything above it down by one."""
        self._check(0, row)
        for column in self._columns:
            del column[row]
            column.insert(0, 0)

    def clear_full_rows(self) -> int:
        """Remove every full row, top to bottom, and return how many were removed."""
        cleared = 0
        for row in range(HEIGHT):
            if self.is_row_full(row):
                self.clear_row(row)
                cleared += 1
        return cleared

    def lock_tetromino(self, tetromino: _Piece) -> None:
        """Write the tetromino's blocks into the grid in its color."""
        for dy, row in enumerate(tetromino.blocks):
            for dx, filled in enumerate(row):
                if filled:
                    self.set_cell(tetromino.x + dx, tetromino.y + dy, tetromino.color)

    def is_valid_position(self, blocks: Sequence[Sequence[bool]], new_x: int, new_y: int) -> bool:
        """True if the blocks placed at (new_x, new_y) stay inside and hit nothing."""
        for dy, row in enumerate(blocks):
            for dx, filled in enumerate(row):
                if not filled:
                    continue
                x, y = new_x + dx, new_y + dy
                if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
                    return False
                if self._columns[x][y] != 0:
                    return False
        return True

    def clear(self) -> None:
        """Empty every cell."""
        for column in self._columns:
            column[:] = [0] * HEIGHT