from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from tictactoe.board import SIZE


class GameCreateRequest(BaseModel):
    player_id: str = Field(..., min_length=1, max_length=200)
    # Optional pre-declared second player; when set only they may join.
    opponent: str | None = Field(default=None, min_length=1, max_length=200)


class TurnRequest(BaseModel):
    # Deliberately unbounded: out-of-range coordinates are a game rule error, not a schema error.
    coordinate: int


class GameState(BaseModel):
    """Persisted game snapshot.

    `board` and `status` hold the compact codes (mark 0/1, status 0..5) so
    the stored JSON stays stable regardless of in-memory representation.
    """

    game_id: UUID
    created_at: datetime
    last_updated_at: datetime

    player_x: str
    player_o: str | None = None

    board: list[int | None] = Field(default_factory=lambda: [None] * SIZE, min_length=SIZE, max_length=SIZE)
    status: int = Field(default=0, ge=0, le=5)


class GameListResponse(BaseModel):
    games: list[GameState]


class BoardResponse(BaseModel):
    game_id: UUID
    cells: list[str | None]


class GameStatusResponse(BaseModel):
    game_id: UUID
    status: str
    player: str | None = None
    code: int
    turning_player: str | None = None
