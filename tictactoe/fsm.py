from __future__ import annotations

from typing import TYPE_CHECKING

from statemachine import State, StateMachine

from tictactoe.game_status import GameStatus

if TYPE_CHECKING:
    from tictactoe.game import TicTacToe


class StatusFSM(StateMachine):
    """FSM wrapper around a game's status.

    State values are the persisted status codes, so a machine can be rebuilt
    from storage with `start_value=status.code`. The controller decides *which*
    transition applies; the FSM only guards that it is a legal one.
    """

    not_started = State("NotStarted", value=0, initial=True)
    x_turning = State("Turning(x)", value=1)
    o_turning = State("Turning(o)", value=2)
    x_won = State("Won(x)", value=3, final=True)
    o_won = State("Won(o)", value=4, final=True)
    draw = State("Draw", value=5, final=True)

    begin = not_started.to(x_turning)
    switch_player = x_turning.to(o_turning) | o_turning.to(x_turning)
    win = x_turning.to(x_won) | o_turning.to(o_won)
    tie = x_turning.to(draw) | o_turning.to(draw)

    def __init__(self, game: TicTacToe):
        self.game = game
        super().__init__(start_value=game.status.code)

    @property
    def status(self) -> GameStatus:
        return GameStatus.from_code(int(self.current_state.value))

    def sync_status_to_model(self) -> None:
        self.game.status = self.status

