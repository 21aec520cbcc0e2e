from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from tictactoe.errors import (
    ForGameNeedsAtLeast2Players,
    GameAlreadyOver,
    GameAlreadyStarted,
    GameNotStarted,
    WaitingAnotherDefinedPlayer,
)
from tictactoe.game_status import StatusKind
from tictactoe.turn_processing.turns import assert_is_players_turn, resolve_role

if TYPE_CHECKING:
    from tictactoe.game import TicTacToe

ActionName = Literal["join", "turn"]


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators."""

    caller: str
    action: ActionName


class TurnValidator(ABC):
    """A small, composable validation unit for an incoming operation."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        raise NotImplementedError


# ============ join ============


@dataclass(frozen=True, slots=True)
class NotStartedValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        if game.status.kind != StatusKind.not_started:
            raise GameAlreadyStarted("Game has already started")


@dataclass(frozen=True, slots=True)
class DistinctPlayersValidator(TurnValidator):
    """The first player cannot also take the second seat."""

    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        if ctx.caller == game.player_x:
            raise ForGameNeedsAtLeast2Players("A game needs two different players")


@dataclass(frozen=True, slots=True)
class DeclaredOpponentValidator(TurnValidator):
    """When an opponent was named at creation, only they may join."""

    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        if game.player_o is not None and game.player_o != ctx.caller:
            raise WaitingAnotherDefinedPlayer(f"Game is reserved for {game.player_o!r}")


# ============ turn ============


@dataclass(frozen=True, slots=True)
class KnownPlayerValidator(TurnValidator):
    """Caller must resolve to one of the two bound roles."""

    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        resolve_role(game=game, caller=ctx.caller)


@dataclass(frozen=True, slots=True)
class InProgressValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        if game.status.kind == StatusKind.not_started:
            raise GameNotStarted("Game has not started yet")
        if game.status.is_over:
            raise GameAlreadyOver("Game is over")


@dataclass(frozen=True, slots=True)
class TurnOrderValidator(TurnValidator):
    """Only the player whose turn it is may place a mark."""

    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        assert_is_players_turn(game=game, caller=ctx.caller)


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[TurnValidator, ...]

    def validate(self, *, ctx: ValidationContext, game: TicTacToe) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, game=game)


# Order matters: the first failing validator decides which error the caller sees.
DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "join": ValidatorPipeline(
        validators=(
            NotStartedValidator(),
            DistinctPlayersValidator(),
            DeclaredOpponentValidator(),
        )
    ),
    "turn": ValidatorPipeline(
        validators=(
            KnownPlayerValidator(),
            InProgressValidator(),
            TurnOrderValidator(),
        )
    ),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
