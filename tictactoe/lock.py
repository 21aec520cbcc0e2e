from __future__ import annotations

import os
import uuid
from contextlib import contextmanager
from collections.abc import Iterator

import redis

from tictactoe.errors import GameBusy


def get_lock_ttl_ms() -> int:
    return int(os.environ.get("TICTACTOE_LOCK_TTL_MS", "5000"))


def _lock_key(game_id: str) -> str:
    return f"lock:game:{game_id}"


@contextmanager
def game_lock(*, r: redis.Redis, game_id: str, ttl_ms: int | None = None) -> Iterator[None]:
    """Exclusive per-game lock held for a whole load/apply/save cycle.

    Fails fast with `GameBusy` instead of waiting. The TTL bounds how long a
    crashed holder can block the game.
    """

    key = _lock_key(game_id)
    token = uuid.uuid4().hex
    acquired = r.set(key, token, nx=True, px=ttl_ms or get_lock_ttl_ms())
    if not acquired:
        raise GameBusy(f"Game {game_id} is busy")
    try:
        yield
    finally:
        # Only release our own lock; it may have expired and been re-taken.
        if r.get(key) == token:
            r.delete(key)
