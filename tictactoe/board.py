from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import IntEnum, StrEnum

from tictactoe.errors import CoordinateAlreadyFilled, CoordinateNotExists

LENGTH = 3
SIZE = LENGTH * LENGTH


class Mark(IntEnum):
    """Cell content. The int value is the compact storage code."""

    X = 0
    O = 1

    @property
    def code(self) -> int:
        return int(self)

    @classmethod
    def from_code(cls, code: int) -> Mark:
        try:
            return cls(code)
        except ValueError as e:
            raise ValueError(f"Unknown mark code: {code!r}") from e


class Player(StrEnum):
    x = "x"
    o = "o"

    @property
    def mark(self) -> Mark:
        return Mark.X if self is Player.x else Mark.O

    @property
    def other(self) -> Player:
        return Player.o if self is Player.x else Player.x


class Board:
    """Fixed 3x3 grid of optional marks, row-major.

    Cells only ever go from empty to occupied, one per `place` call.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Sequence[Mark | None] | None = None) -> None:
        if cells is None:
            self._cells: list[Mark | None] = [None] * SIZE
            return
        if len(cells) != SIZE:
            raise ValueError(f"Board needs exactly {SIZE} cells, got {len(cells)}")
        self._cells = [None if c is None else Mark(c) for c in cells]

    @classmethod
    def from_codes(cls, codes: Sequence[int | None]) -> Board:
        return cls([None if c is None else Mark.from_code(c) for c in codes])

    def to_codes(self) -> list[int | None]:
        return [None if c is None else c.code for c in self._cells]

    @property
    def cells(self) -> tuple[Mark | None, ...]:
        return tuple(self._cells)

    def place(self, player: Player, coordinate: int) -> None:
        # Bounds before occupancy; negative indexes must not wrap around.
        if not 0 <= coordinate < SIZE:
            raise CoordinateNotExists(f"Coordinate {coordinate} is outside 0..{SIZE - 1}")
        if self._cells[coordinate] is not None:
            raise CoordinateAlreadyFilled(f"Coordinate {coordinate} is already filled")
        self._cells[coordinate] = player.mark

    def is_full(self) -> bool:
        return all(c is not None for c in self._cells)

    def copy(self) -> Board:
        return Board(self._cells)

    def __getitem__(self, idx: int) -> Mark | None:
        return self._cells[idx]

    def __iter__(self) -> Iterator[Mark | None]:
        return iter(self._cells)

    def __len__(self) -> int:
        return SIZE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board({self.to_codes()!r})"
