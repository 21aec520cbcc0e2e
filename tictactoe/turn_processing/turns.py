from __future__ import annotations

from typing import TYPE_CHECKING

from tictactoe.board import Player
from tictactoe.errors import AnotherPlayerShouldTurn, GameNotStarted, UnknownPlayer
from tictactoe.game_status import StatusKind

if TYPE_CHECKING:
    from tictactoe.game import TicTacToe


def resolve_role(*, game: TicTacToe, caller: str) -> Player:
    """Map a caller identity onto the role it plays in this game.

    The second player is checked first; a game nobody has joined yet has no
    roles to resolve at all.
    """

    if game.player_o is None:
        raise GameNotStarted("Waiting for a second player to join")
    if caller == game.player_o:
        return Player.o
    if caller == game.player_x:
        return Player.x
    raise UnknownPlayer(f"{caller!r} is not playing this game")


def identity_of(*, game: TicTacToe, player: Player) -> str:
    if player is Player.x:
        return game.player_x
    if game.player_o is None:
        raise GameNotStarted("Waiting for a second player to join")
    return game.player_o


def current_turn_player_id(*, game: TicTacToe) -> str | None:
    status = game.status
    if status.kind != StatusKind.turning or status.player is None:
        return None
    return identity_of(game=game, player=status.player)


def assert_is_players_turn(*, game: TicTacToe, caller: str) -> None:
    expected = game.status.player
    if resolve_role(game=game, caller=caller) != expected:
        raise AnotherPlayerShouldTurn(f"Not your turn (expected player={current_turn_player_id(game=game)})")
