from __future__ import annotations

import pytest

from tictactoe.board import Player
from tictactoe.errors import (
    AnotherPlayerShouldTurn,
    ForGameNeedsAtLeast2Players,
    GameAlreadyOver,
    GameAlreadyStarted,
    GameNotStarted,
    UnknownPlayer,
    WaitingAnotherDefinedPlayer,
)
from tictactoe.game import TicTacToe
from tictactoe.game_status import GameStatus
from tictactoe.turn_processing.turns import current_turn_player_id, resolve_role
from tictactoe.turn_processing.validators import ValidationContext, pipeline_for_action


def _join(game: TicTacToe, caller: str) -> None:
    pipeline_for_action("join").validate(ctx=ValidationContext(caller=caller, action="join"), game=game)


def _turn(game: TicTacToe, caller: str) -> None:
    pipeline_for_action("turn").validate(ctx=ValidationContext(caller=caller, action="turn"), game=game)


def test_unknown_action_pipeline_raises() -> None:
    with pytest.raises(ValueError) as e:
        pipeline_for_action("nope")
    assert "Unknown action" in str(e.value)


def test_join_pipeline_order() -> None:
    started = TicTacToe(player_x="alice", player_o="bob", status=GameStatus.turning(Player.x))
    with pytest.raises(GameAlreadyStarted):
        _join(started, "alice")

    reserved = TicTacToe(player_x="alice", player_o="bob")
    with pytest.raises(ForGameNeedsAtLeast2Players):
        _join(reserved, "alice")
    with pytest.raises(WaitingAnotherDefinedPlayer):
        _join(reserved, "carol")
    _join(reserved, "bob")

    open_game = TicTacToe(player_x="alice")
    _join(open_game, "carol")


def test_join_pipeline_does_not_mutate() -> None:
    game = TicTacToe(player_x="alice")
    _join(game, "bob")
    assert game.player_o is None
    assert game.status == GameStatus.not_started()


def test_turn_pipeline_order() -> None:
    lonely = TicTacToe(player_x="alice")
    with pytest.raises(GameNotStarted):
        _turn(lonely, "mallory")

    over = TicTacToe(player_x="alice", player_o="bob", status=GameStatus.draw())
    with pytest.raises(UnknownPlayer):
        _turn(over, "mallory")
    with pytest.raises(GameAlreadyOver):
        _turn(over, "bob")

    playing = TicTacToe(player_x="alice", player_o="bob", status=GameStatus.turning(Player.o))
    with pytest.raises(AnotherPlayerShouldTurn) as e:
        _turn(playing, "alice")
    assert "bob" in str(e.value)
    _turn(playing, "bob")


def test_resolve_role_prefers_second_player_slot() -> None:
    game = TicTacToe(player_x="alice", player_o="bob")
    assert resolve_role(game=game, caller="bob") is Player.o
    assert resolve_role(game=game, caller="alice") is Player.x


def test_current_turn_player_id() -> None:
    game = TicTacToe(player_x="alice", player_o="bob", status=GameStatus.turning(Player.o))
    assert current_turn_player_id(game=game) == "bob"

    game.status = GameStatus.won(Player.o)
    assert current_turn_player_id(game=game) is None
