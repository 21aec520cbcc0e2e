"""Rejected-operation errors.

Every rule violation raised by the engine derives from `GameError` (a
`ValueError`). A raised error means the operation was rejected and the game
state is exactly as it was before the call.
"""

from __future__ import annotations


class GameError(ValueError):
    """Base class for all game errors."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)

    @property
    def code(self) -> str:
        return type(self).__name__


# ============ Board ============


class CoordinateNotExists(GameError):
    """Coordinate is outside the board."""


class CoordinateAlreadyFilled(GameError):
    """Target cell already holds a mark."""


# ============ Turn ============


class GameNotStarted(GameError):
    """Turn attempted before a second player joined."""


class GameAlreadyOver(GameError):
    """Turn attempted after a win or a draw."""


class AnotherPlayerShouldTurn(GameError):
    pass


class UnknownPlayer(GameError):
    """Caller is neither of the bound players."""


# ============ Join ============


class ForGameNeedsAtLeast2Players(GameError):
    """The first player tried to play against themselves."""


class WaitingAnotherDefinedPlayer(GameError):
    """Join attempted by someone other than the pre-declared opponent."""


class GameAlreadyStarted(GameError):
    pass


# ============ Service ============


class GameNotFound(GameError):
    def __init__(self, game_id: object) -> None:
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found")


class GameBusy(GameError):
    """Another operation holds the game's lock."""
