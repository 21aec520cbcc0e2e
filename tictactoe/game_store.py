from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

import redis

from tictactoe.api.models import GameState
from tictactoe.board import Board
from tictactoe.errors import GameNotFound
from tictactoe.game import TicTacToe
from tictactoe.game_status import GameStatus


GAMES_SET_KEY = "tictactoe:games"
GAME_KEY_PREFIX = "tictactoe:game:"  # + {uuid}


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _game_key(game_id: UUID) -> str:
    return f"{GAME_KEY_PREFIX}{game_id}"


def load_controller(state: GameState) -> TicTacToe:
    """Rebuild the engine from a persisted snapshot (compact codes -> enums)."""

    return TicTacToe(
        player_x=state.player_x,
        player_o=state.player_o,
        board=Board.from_codes(state.board),
        status=GameStatus.from_code(state.status),
    )


def store_controller(*, state: GameState, game: TicTacToe) -> GameState:
    """Copy the engine's committed state back onto the snapshot."""

    state.player_o = game.player_o
    state.board = game.board.to_codes()
    state.status = game.status.code
    return state


def save_game(*, r: redis.Redis, state: GameState) -> None:
    state.last_updated_at = _now()
    r.set(_game_key(state.game_id), state.model_dump_json())


def get_game(*, r: redis.Redis, game_id: UUID) -> GameState | None:
    raw = r.get(_game_key(game_id))
    if not raw:
        return None
    return GameState.model_validate_json(raw)


def require_game(*, r: redis.Redis, game_id: UUID) -> GameState:
    state = get_game(r=r, game_id=game_id)
    if state is None:
        raise GameNotFound(game_id)
    return state


def create_game(*, r: redis.Redis, game: TicTacToe) -> GameState:
    """Persist a freshly created engine under a new game id."""

    game_id = uuid4()
    now = _now()
    state = store_controller(
        state=GameState(game_id=game_id, created_at=now, last_updated_at=now, player_x=game.player_x),
        game=game,
    )

    r.set(_game_key(game_id), state.model_dump_json())
    r.sadd(GAMES_SET_KEY, str(game_id))
    return state


def list_games(*, r: redis.Redis) -> list[GameState]:
    ids = sorted(r.smembers(GAMES_SET_KEY))
    out: list[GameState] = []
    for sid in ids:
        try:
            gid = UUID(sid)
        except ValueError:
            continue
        state = get_game(r=r, game_id=gid)
        if state is not None:
            out.append(state)
    out.sort(key=lambda s: s.created_at, reverse=True)
    return out
