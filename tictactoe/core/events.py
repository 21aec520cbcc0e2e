from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

EventType = Literal[
    "WAITING_OPPONENT",
    "GAME_STARTED",
    "PLAYER_TURN",
    "GAME_END",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A notification queued by the engine after a committed transition.

    `turn_id` is the number of marks on the board when the event fired.
    Payload values are player identities (or None) plus, for turns, the
    coordinate that was played.
    """

    type: EventType
    turn_id: int
    payload: dict[str, str | int | None]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, turn_id: int, payload: dict[str, str | int | None]) -> "GameEvent":
        return GameEvent(type=type, turn_id=turn_id, payload=payload, ts=datetime.now(timezone.utc))

    def to_fields(self) -> dict[str, str]:
        """Flatten into string-only fields for a redis stream entry."""

        fields = {"type": self.type, "turn_id": str(self.turn_id), "ts": self.ts.isoformat()}
        for k, v in self.payload.items():
            fields[k] = "" if v is None else str(v)
        return fields


def waiting_opponent(*, player_x: str, player_o: str | None) -> GameEvent:
    return GameEvent.now(type="WAITING_OPPONENT", turn_id=0, payload={"player_x": player_x, "player_o": player_o})


def game_started(*, player_x: str, player_o: str) -> GameEvent:
    return GameEvent.now(type="GAME_STARTED", turn_id=0, payload={"player_x": player_x, "player_o": player_o})


def player_turn(*, turn_id: int, turned_player: str, next_player: str, coordinate: int) -> GameEvent:
    return GameEvent.now(
        type="PLAYER_TURN",
        turn_id=turn_id,
        payload={"turned_player": turned_player, "next_player": next_player, "coordinate": coordinate},
    )


def game_end(*, turn_id: int, winner: str | None) -> GameEvent:
    return GameEvent.now(type="GAME_END", turn_id=turn_id, payload={"winner": winner})
