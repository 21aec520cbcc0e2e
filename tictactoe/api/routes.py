from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
import redis

from tictactoe.actions import ActionResult, create_game_action, dispatch_action
from tictactoe.api.deps import get_redis
from tictactoe.api.models import (
    BoardResponse,
    GameCreateRequest,
    GameListResponse,
    GameState,
    GameStatusResponse,
    TurnRequest,
)
from tictactoe.errors import GameError, GameNotFound
from tictactoe.game_store import get_game, list_games, load_controller
from tictactoe.streams import Mailbox, read_mailbox
from tictactoe.websocket_hub import hub

router = APIRouter()


def _http_error(e: GameError) -> HTTPException:
    code = status.HTTP_404_NOT_FOUND if isinstance(e, GameNotFound) else status.HTTP_409_CONFLICT
    return HTTPException(status_code=code, detail={"error": e.code, "message": str(e)})


def _require_state(r: redis.Redis, game_id: UUID) -> GameState:
    state = get_game(r=r, game_id=game_id)
    if state is None:
        raise _http_error(GameNotFound(game_id))
    return state


async def _announce(result: ActionResult) -> GameState:
    state = result.state
    await hub.publish_update(str(state.game_id), state.status, result.events)
    return state


@router.websocket("/ws/game/{game_id}")
async def game_updates_ws(websocket: WebSocket, game_id: UUID) -> None:
    gid = str(game_id)
    await hub.connect(gid, websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(gid, websocket)
    except Exception:
        await hub.disconnect(gid, websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=GameState, status_code=status.HTTP_201_CREATED)
async def create_game_route(payload: GameCreateRequest, r: redis.Redis = Depends(get_redis)) -> GameState:
    try:
        result = create_game_action(r=r, player_id=payload.player_id, opponent=payload.opponent)
    except GameError as e:
        raise _http_error(e) from e
    return await _announce(result)


@router.get("/game", response_model=GameListResponse)
async def list_games_route(r: redis.Redis = Depends(get_redis)) -> GameListResponse:
    return GameListResponse(games=list_games(r=r))


@router.get("/game/{game_id}", response_model=GameState)
async def get_game_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> GameState:
    return _require_state(r, game_id)


@router.get("/game/{game_id}/board", response_model=BoardResponse)
async def get_board_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> BoardResponse:
    game = load_controller(_require_state(r, game_id))
    cells = [None if c is None else c.name for c in game.get_board()]
    return BoardResponse(game_id=game_id, cells=cells)


@router.get("/game/{game_id}/status", response_model=GameStatusResponse)
async def get_status_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> GameStatusResponse:
    game = load_controller(_require_state(r, game_id))
    gs = game.get_game_status()
    return GameStatusResponse(
        game_id=game_id,
        status=gs.kind.value,
        player=None if gs.player is None else gs.player.value,
        code=gs.code,
        turning_player=game.get_turning_player(),
    )


@router.post("/game/{game_id}/player/{player_id}/join", response_model=GameState)
async def join_route(game_id: UUID, player_id: str, r: redis.Redis = Depends(get_redis)) -> GameState:
    try:
        result = dispatch_action(r=r, game_id=game_id, player_id=player_id, action="join")
    except GameError as e:
        raise _http_error(e) from e
    return await _announce(result)


@router.post("/game/{game_id}/player/{player_id}/turn", response_model=GameState)
async def turn_route(
    game_id: UUID,
    player_id: str,
    payload: TurnRequest,
    r: redis.Redis = Depends(get_redis),
) -> GameState:
    try:
        result = dispatch_action(r=r, game_id=game_id, player_id=player_id, action="turn", coordinate=payload.coordinate)
    except GameError as e:
        raise _http_error(e) from e
    return await _announce(result)


@router.get("/games/{game_id}/players/{player_id}/mailbox")
async def get_player_mailbox_route(
    game_id: UUID,
    player_id: str,
    count: int = 20,
    start: str = "-",
    end: str = "+",
    r: redis.Redis = Depends(get_redis),
) -> dict[str, object]:
    """Debug endpoint: read a player's mailbox Redis Stream.

    Intended for local/dev testing when redis-cli isn't available.
    """

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    mailbox = Mailbox(game_id=str(game_id), player_id=player_id)
    try:
        entries = read_mailbox(r=r, mailbox=mailbox, start=start, end=end, count=count)
    except redis.ResponseError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    messages = [{"id": mid, "fields": fields} for mid, fields in entries]
    return {"game_id": str(game_id), "player_id": player_id, "stream": mailbox.key, "messages": messages}
