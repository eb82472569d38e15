"""Falling pieces: their shapes, positions, movement and rotation."""

from __future__ import annotations

from enum import IntEnum

from termtetris.playfield import WIDTH, Playfield


class Shape(IntEnum):
    """The seven tetromino shapes."""

    I = 0  # noqa: E741
    J = 1
    L = 2
    S = 3
    Z = 4
    T = 5
    O = 6  # noqa: E741


_F, _T = False, True

_HORIZONTAL_I = [
    [_F, _F, _F, _F],
    [_F, _F, _F, _F],
    [_T, _T, _T, _T],
    [_F, _F, _F, _F],
]

_VERTICAL_I = [
    [_F, _F, _T, _F],
    [_F, _F, _T, _F],
    [_F, _F, _T, _F],
    [_F, _F, _T, _F],
]

_BLOCKS: dict[Shape, list[list[bool]]] = {
    Shape.I: _HORIZONTAL_I,
    Shape.J: [[_F, _F, _F], [_T, _T, _T], [_F, _F, _T]],
    Shape.L: [[_F, _F, _F], [_T, _T, _T], [_T, _F, _F]],
    Shape.O: [[_T, _T], [_T, _T]],
    Shape.S: [[_F, _F, _F], [_F, _T, _T], [_T, _T, _F]],
    Shape.T: [[_F, _F, _F], [_T, _T, _T], [_F, _T, _F]],
    Shape.Z: [[_F, _F, _F], [_T, _T, _F], [_F, _T, _T]],
}

_SPAWN: dict[Shape, tuple[int, int]] = {Shape.O: (4, 2), Shape.I: (3, 0)}
_DEFAULT_SPAWN = (3, 1)


def _copy(blocks: list[list[bool]]) -> list[list[bool]]:
    return [list(row) for row in blocks]


class Tetromino:
    """A piece with a square block grid placed at (x, y) on the playfield."""

    def __init__(self, shape: Shape | int) -> None:
        try:
            self.shape = Shape(shape)
        except ValueError:
            raise ValueError("Invalid shape") from None
        self.color = int(self.shape) + 2
        self.x, self.y = _SPAWN.get(self.shape, _DEFAULT_SPAWN)
        self._blocks = _copy(_BLOCKS[self.shape])

    @property
    def blocks(self) -> list[list[bool]]:
        """A copy of the block grid, indexed as blocks[row][column]."""
        return _copy(self._blocks)

    def move_left(self) -> None:
        self.x -= 1

    def move_right(self) -> None:
        self.x += 1

    def move_down(self) -> None:
        self.y += 1

    def hard_drop(self, playfield: Playfield) -> int:
        """Drop the piece as far as it goes and return the number of rows it fell."""
        steps = 0
        while self.can_move_down(playfield):
            self.y += 1
            steps += 1
        return steps

    def _rotated_i(self) -> list[list[bool]]:
        return _copy(_VERTICAL_I if self._blocks[2][0] else _HORIZONTAL_I)

    def _try_rotation(self, rotated: list[list[bool]], playfield: Playfield) -> None:
        offsets = [0, 1]
        if self.shape is Shape.I:
            offsets.append(2)
        offsets.append(-1)
        for offset in offsets:
            if playfield.is_valid_position(rotated, self.x + offset, self.y):
                self.x += offset
                self._blocks = rotated
                return

    def rotate_cw(self, playfield: Playfield) -> None:
        """Turn 90 degrees clockwise, shifting sideways if needed; stay put if no fit."""
        if self.shape is Shape.I:
            rotated = self._rotated_i()
        else:
            rotated = [list(row) for row in zip(*reversed(self._blocks))]
        self._try_rotation(rotated, playfield)

    def rotate_ccw(self, playfield: Playfield) -> None:
        """Turn 90 degrees counter-clockwise, shifting sideways if needed; stay put if no fit."""
        if self.shape is Shape.I:
            rotated = self._rotated_i()
        else:
            rotated = [list(row) for row in zip(*self._blocks)][::-1]
        self._try_rotation(rotated, playfield)

    def can_move_left(self, playfield: Playfield) -> bool:
        return playfield.is_valid_position(self._blocks, self.x - 1, self.y)

    def can_move_right(self, playfield: Playfield) -> bool:
        return playfield.is_valid_position(self._blocks, self.x + 1, self.y)

    def can_move_down(self, playfield: Playfield) -> bool:
        return playfield.is_valid_position(self._blocks, self.x, self.y + 1)

    def _filled_columns(self) -> list[int]:
        return [
            self.x + dx
            for row in self._blocks
            for dx, filled in enumerate(row)
            if filled
        ]

    def is_outside_left(self) -> bool:
        """True if any block lies left of the playfield."""
        return any(column < 0 for column in self._filled_columns())

    def is_outside_right(self) -> bool:
        """True if any block lies right of the playfield."""
        return any(column >= WIDTH for column in self._filled_columns())