from __future__ import annotations

import pytest

from tictactoe.board import SIZE, Board, Mark, Player
from tictactoe.errors import CoordinateAlreadyFilled, CoordinateNotExists


def test_new_board_is_empty() -> None:
    board = Board()
    assert len(board) == SIZE == 9
    assert board.cells == (None,) * 9
    assert not board.is_full()


def test_place_sets_mark_for_player() -> None:
    board = Board()
    board.place(Player.x, 0)
    board.place(Player.o, 8)

    assert board[0] is Mark.X
    assert board[8] is Mark.O
    assert board.to_codes() == [0, None, None, None, None, None, None, None, 1]


@pytest.mark.parametrize("coordinate", [-1, -9, 9, 10, 255])
def test_out_of_bounds_coordinate_is_rejected(coordinate: int) -> None:
    board = Board()
    board.place(Player.x, 4)
    before = board.to_codes()

    with pytest.raises(CoordinateNotExists):
        board.place(Player.o, coordinate)

    assert board.to_codes() == before


def test_filled_cell_is_rejected_and_board_unchanged() -> None:
    board = Board()
    board.place(Player.x, 0)

    with pytest.raises(CoordinateAlreadyFilled):
        board.place(Player.o, 0)
    with pytest.raises(CoordinateAlreadyFilled):
        board.place(Player.x, 0)

    assert board.to_codes()[0] == Mark.X.code
    assert sum(c is not None for c in board) == 1


def test_bounds_checked_before_occupancy() -> None:
    board = Board.from_codes([0, 1, 0, 0, 1, 0, 1, 0, 1])
    assert board.is_full()

    with pytest.raises(CoordinateNotExists):
        board.place(Player.x, 9)


def test_cells_snapshot_is_read_only() -> None:
    board = Board()
    snapshot = board.cells
    board.place(Player.x, 3)

    assert snapshot[3] is None
    assert board.cells[3] is Mark.X


def test_copy_is_independent() -> None:
    board = Board()
    copy = board.copy()
    copy.place(Player.o, 1)

    assert board[1] is None
    assert copy[1] is Mark.O
    assert board != copy


def test_from_codes_validates_shape_and_codes() -> None:
    with pytest.raises(ValueError):
        Board.from_codes([None] * 8)
    with pytest.raises(ValueError):
        Board.from_codes([2] + [None] * 8)


def test_mark_codes_and_player_mapping() -> None:
    assert Mark.X.code == 0
    assert Mark.O.code == 1
    assert Mark.from_code(0) is Mark.X
    assert Mark.from_code(1) is Mark.O
    with pytest.raises(ValueError):
        Mark.from_code(7)

    assert Player.x.mark is Mark.X
    assert Player.o.mark is Mark.O
    assert Player.x.other is Player.o
    assert Player.o.other is Player.x
