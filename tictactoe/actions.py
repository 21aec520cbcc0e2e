from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

import redis

from tictactoe.api.models import GameState
from tictactoe.core.events import GameEvent
from tictactoe.errors import GameError
from tictactoe.game import TicTacToe
from tictactoe.game_store import create_game, load_controller, require_game, save_game, store_controller
from tictactoe.lock import game_lock
from tictactoe.streams import Mailbox, publish_many
from tictactoe.turn_processing.validators import ActionName

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult:
    state: GameState
    events: list[GameEvent]
    mailbox_entry_ids: list[str]


def _participants(state: GameState) -> list[str]:
    return [p for p in (state.player_x, state.player_o) if p is not None]


def _mailbox_entries_for_events(*, state: GameState, events: list[GameEvent]) -> list[tuple[str, dict[str, str]]]:
    """Fan every notification out to each bound player's mailbox."""

    gid = str(state.game_id)
    entries: list[tuple[str, dict[str, str]]] = []
    for event in events:
        fields = {"game_id": gid, "status": str(state.status), **event.to_fields()}
        for player_id in _participants(state):
            entries.append((Mailbox(game_id=gid, player_id=player_id).key, fields))
    return entries


def _commit(*, r: redis.Redis, state: GameState, game: TicTacToe) -> ActionResult:
    store_controller(state=state, game=game)
    save_game(r=r, state=state)

    events = game.drain_events()
    ids = publish_many(r=r, entries=_mailbox_entries_for_events(state=state, events=events))
    return ActionResult(state=state, events=events, mailbox_entry_ids=ids)


def create_game_action(*, r: redis.Redis, player_id: str, opponent: str | None = None) -> ActionResult:
    game = TicTacToe.with_opponent(player_id, opponent) if opponent is not None else TicTacToe.new(player_id)

    state = create_game(r=r, game=game)
    events = game.drain_events()
    ids = publish_many(r=r, entries=_mailbox_entries_for_events(state=state, events=events))

    logger.info("game %s created by %s (opponent=%s)", state.game_id, player_id, opponent)
    return ActionResult(state=state, events=events, mailbox_entry_ids=ids)


def dispatch_action(
    *,
    r: redis.Redis,
    game_id: UUID,
    player_id: str,
    action: ActionName,
    coordinate: int | None = None,
) -> ActionResult:
    """Entry point for every mutating request on an existing game.

    Applies an action by:
    - acquiring the per-game lock
    - loading the snapshot and rebuilding the engine
    - applying `join` or `turn` (rule errors propagate, nothing is saved)
    - persisting the snapshot
    - publishing the engine's notifications to mailboxes (Redis Streams)
    """

    with game_lock(r=r, game_id=str(game_id)):
        state = require_game(r=r, game_id=game_id)
        game = load_controller(state)

        try:
            if action == "join":
                game.join(player_id)
            elif action == "turn":
                if coordinate is None:
                    raise ValueError("coordinate is required")
                game.turn(player_id, coordinate)
            else:
                raise ValueError(f"Unknown action: {action}")
        except GameError as e:
            logger.info("game %s: %s by %s rejected: %s", game_id, action, player_id, e.code)
            raise

        result = _commit(r=r, state=state, game=game)

    logger.info("game %s: %s by %s -> status %s", game_id, action, player_id, game.status)
    return result
