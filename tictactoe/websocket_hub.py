from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Sequence

from fastapi import WebSocket

from tictactoe.core.events import GameEvent


class GameWebSocketHub:
    """In-process WebSocket pub/sub keyed by game_id.

    Contract:
      - assign connection to a game_id via `connect(game_id, websocket)`.
      - push a `game_updated` message plus the committed notifications with
        `publish_update(game_id, status, events)`.

    Payloads are JSON-serializable dicts. Watchers are spectators: they get
    every notification of the game, not a per-player view.
    """

    def __init__(self) -> None:
        self._by_game: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, game_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._by_game[game_id].add(websocket)

    async def disconnect(self, game_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            conns = self._by_game.get(game_id)
            if not conns:
                return
            conns.discard(websocket)
            if not conns:
                self._by_game.pop(game_id, None)

    async def broadcast(self, game_id: str, payload: dict[str, object]) -> None:
        async with self._lock:
            conns = list(self._by_game.get(game_id, set()))

        if not conns:
            return

        dead: list[WebSocket] = []
        for ws in conns:
            try:
                await ws.send_json(payload)
            except Exception:
                # Client went away mid-send; drop it below.
                dead.append(ws)

        if dead:
            async with self._lock:
                for ws in dead:
                    self._by_game.get(game_id, set()).discard(ws)

    async def publish_update(self, game_id: str, status: int, events: Sequence[GameEvent]) -> None:
        await self.broadcast(game_id, {"type": "game_updated", "game_id": game_id, "status": status})
        for event in events:
            await self.broadcast(
                game_id,
                {"type": "event", "game_id": game_id, "event": event.type, "turn_id": event.turn_id, "payload": dict(event.payload)},
            )


hub = GameWebSocketHub()
