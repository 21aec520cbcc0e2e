from __future__ import annotations

import pytest

from conftest import board_of
from tictactoe.board import Player
from tictactoe.game import TicTacToe
from tictactoe.game_status import GameStatus

_ = None


@pytest.mark.parametrize(
    ("cells", "player", "coordinate", "expected"),
    [
        # top row of O
        ((1, 1, 1, _, _, _, _, _, _), Player.o, 2, GameStatus.won(Player.o)),
        # top row of X
        ((0, 0, 0, _, _, _, _, _, _), Player.x, 2, GameStatus.won(Player.x)),
        # middle column
        ((_, 0, _, _, 0, _, _, 0, _), Player.x, 1, GameStatus.won(Player.x)),
        # anti-diagonal
        ((_, _, 0, _, 0, _, 0, _, _), Player.x, 2, GameStatus.won(Player.x)),
        # main diagonal
        ((0, _, _, _, 0, _, _, _, 0), Player.x, 0, GameStatus.won(Player.x)),
        # full board, no line
        ((0, 1, 0, 0, 1, 0, 1, 0, 1), Player.x, 0, GameStatus.draw()),
    ],
)
def test_check_state_scenarios(cells: tuple, player: Player, coordinate: int, expected: GameStatus) -> None:
    assert TicTacToe.check_state(board_of(*cells), player, coordinate) == expected


def test_no_terminal_condition() -> None:
    board = board_of(0, 1, _, _, 0, _, _, _, 1)
    assert TicTacToe.check_state(board, Player.x, 4) is None


def test_line_of_other_players_marks_does_not_count() -> None:
    board = board_of(1, 1, 1, 0, 0, _, _, _, _)
    assert TicTacToe.check_state(board, Player.x, 4) is None


def test_diagonals_are_checked_even_off_the_played_cell() -> None:
    # Coordinate 1 lies on neither diagonal, yet the main diagonal is complete.
    board = board_of(0, 0, _, _, 0, _, _, _, 0)
    assert TicTacToe.check_state(board, Player.x, 1) == GameStatus.won(Player.x)


def test_rows_and_columns_are_only_checked_through_the_played_cell() -> None:
    # Bottom row is complete but the move was on the top row.
    board = board_of(0, 1, _, _, _, _, 1, 1, 1)
    assert TicTacToe.check_state(board, Player.o, 1) is None


def test_win_on_last_cell_beats_draw() -> None:
    board = board_of(0, 1, 0, 1, 0, 1, 1, 0, 0)
    assert TicTacToe.check_state(board, Player.x, 8) == GameStatus.won(Player.x)
