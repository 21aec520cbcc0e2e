from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tictactoe.board import Player


class StatusKind(StrEnum):
    not_started = "not_started"
    turning = "turning"
    won = "won"
    draw = "draw"


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Whole-game phase.

    `player` is set for `turning` (whose move it is) and `won` (the winner),
    and is None otherwise. `won` and `draw` are terminal.
    """

    kind: StatusKind
    player: Player | None = None

    def __post_init__(self) -> None:
        needs_player = self.kind in (StatusKind.turning, StatusKind.won)
        if needs_player != (self.player is not None):
            raise ValueError(f"Invalid status: kind={self.kind.value} player={self.player}")

    @staticmethod
    def not_started() -> GameStatus:
        return GameStatus(StatusKind.not_started)

    @staticmethod
    def turning(player: Player) -> GameStatus:
        return GameStatus(StatusKind.turning, player)

    @staticmethod
    def won(player: Player) -> GameStatus:
        return GameStatus(StatusKind.won, player)

    @staticmethod
    def draw() -> GameStatus:
        return GameStatus(StatusKind.draw)

    @property
    def is_over(self) -> bool:
        return self.kind in (StatusKind.won, StatusKind.draw)

    @property
    def code(self) -> int:
        return _STATUS_TO_CODE[self]

    @staticmethod
    def from_code(code: int) -> GameStatus:
        try:
            return _CODE_TO_STATUS[code]
        except KeyError as e:
            raise ValueError(f"Unknown game status code: {code!r}") from e


# Persisted representation; these numbers must never change.
_CODE_TO_STATUS: dict[int, GameStatus] = {
    0: GameStatus.not_started(),
    1: GameStatus.turning(Player.x),
    2: GameStatus.turning(Player.o),
    3: GameStatus.won(Player.x),
    4: GameStatus.won(Player.o),
    5: GameStatus.draw(),
}
_STATUS_TO_CODE: dict[GameStatus, int] = {s: c for c, s in _CODE_TO_STATUS.items()}
