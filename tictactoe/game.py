from __future__ import annotations

from tictactoe.board import LENGTH, Board, Player
from tictactoe.core import events
from tictactoe.core.events import GameEvent
from tictactoe.errors import ForGameNeedsAtLeast2Players
from tictactoe.fsm import StatusFSM
from tictactoe.game_status import GameStatus, StatusKind
from tictactoe.turn_processing.turns import current_turn_player_id, identity_of
from tictactoe.turn_processing.validators import ValidationContext, pipeline_for_action


class TicTacToe:
    """One game of tic-tac-toe between two opaque player identities.

    The controller is the only writer of its board and status. Each operation
    either commits completely or raises a `GameError` without touching state.
    Notifications are queued in an outbox the caller drains after committing.
    """

    def __init__(
        self,
        *,
        player_x: str,
        player_o: str | None = None,
        board: Board | None = None,
        status: GameStatus | None = None,
    ) -> None:
        self.player_x = player_x
        self.player_o = player_o
        self.board = board if board is not None else Board()
        self.status = status if status is not None else GameStatus.not_started()
        self._outbox: list[GameEvent] = []

    @classmethod
    def new(cls, caller: str) -> TicTacToe:
        game = cls(player_x=caller)
        game._outbox.append(events.waiting_opponent(player_x=caller, player_o=None))
        return game

    @classmethod
    def with_opponent(cls, caller: str, opponent: str) -> TicTacToe:
        if opponent == caller:
            raise ForGameNeedsAtLeast2Players("A game needs two different players")
        game = cls(player_x=caller, player_o=opponent)
        game._outbox.append(events.waiting_opponent(player_x=caller, player_o=opponent))
        return game

    def join(self, caller: str) -> None:
        pipeline_for_action("join").validate(ctx=ValidationContext(caller=caller, action="join"), game=self)

        fsm = StatusFSM(self)
        fsm.begin()
        self.player_o = caller
        fsm.sync_status_to_model()
        self._outbox.append(events.game_started(player_x=self.player_x, player_o=caller))

    def turn(self, caller: str, coordinate: int) -> None:
        pipeline_for_action("turn").validate(ctx=ValidationContext(caller=caller, action="turn"), game=self)

        player = self.status.player
        assert player is not None
        # Board errors propagate before any status change.
        self.board.place(player, coordinate)

        fsm = StatusFSM(self)
        outcome = self.check_state(self.board, player, coordinate)
        if outcome is None:
            fsm.switch_player()
        elif outcome.kind == StatusKind.won:
            fsm.win()
        else:
            fsm.tie()
        fsm.sync_status_to_model()

        turn_id = self.move_count
        if self.status.is_over:
            winner = None if self.status.player is None else identity_of(game=self, player=self.status.player)
            self._outbox.append(events.game_end(turn_id=turn_id, winner=winner))
        else:
            self._outbox.append(
                events.player_turn(
                    turn_id=turn_id,
                    turned_player=caller,
                    next_player=identity_of(game=self, player=player.other),
                    coordinate=coordinate,
                )
            )

    @staticmethod
    def check_state(board: Board, player: Player, coordinate: int) -> GameStatus | None:
        """Evaluate the board right after `player` placed a mark at `coordinate`.

        Only the row and column through the new mark can have changed, so only
        those are checked; both diagonals are always scanned in full.
        Returns `Won(player)`, `Draw`, or None when the game goes on.
        """

        y = coordinate // LENGTH
        x = coordinate % LENGTH
        mark = player.mark

        def complete(indexes: list[int]) -> bool:
            return all(board[idx] == mark for idx in indexes)

        row = complete([y * LENGTH + i for i in range(LENGTH)])
        column = complete([i * LENGTH + x for i in range(LENGTH)])
        main_diagonal = complete([i * LENGTH + i for i in range(LENGTH)])
        anti_diagonal = complete([(LENGTH - i - 1) * LENGTH + i for i in range(LENGTH)])

        if row or column or main_diagonal or anti_diagonal:
            return GameStatus.won(player)
        if board.is_full():
            return GameStatus.draw()
        return None

    # ============ read accessors ============

    def get_board(self) -> Board:
        return self.board.copy()

    def get_game_status(self) -> GameStatus:
        return self.status

    def get_turning_player(self) -> str | None:
        return current_turn_player_id(game=self)

    @property
    def move_count(self) -> int:
        return sum(1 for c in self.board if c is not None)

    def drain_events(self) -> list[GameEvent]:
        out, self._outbox = self._outbox, []
        return out

    def __repr__(self) -> str:
        return f"TicTacToe(player_x={self.player_x!r}, player_o={self.player_o!r}, status={self.status}, board={self.board})"
