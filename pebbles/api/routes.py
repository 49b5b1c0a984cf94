from __future__ import annotations

from typing import Any, cast

from fastapi import APIRouter, Depends, HTTPException, Response, status

from pebbles.actions import dispatch_action, query_state
from pebbles.api.deps import get_context
from pebbles.api.models import (
    GameState,
    GiveUpAction,
    PebblesAction,
    PebblesEvent,
    PebblesInit,
    RestartAction,
    SessionListResponse,
    TurnAction,
    TurnRequest,
    parse_action,
)
from pebbles.config import get_config
from pebbles.context import GameContext
from pebbles.game_store import list_sessions
from pebbles.randomness import RandomnessUnavailable
from pebbles.streams import Mailbox, read_mailbox

router = APIRouter()


def _dispatch(ctx: GameContext, player_id: str, action: PebblesAction) -> PebblesEvent | GameState:
    try:
        result = dispatch_action(ctx=ctx, player_id=player_id, action=action)
    except RandomnessUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return result.reply


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/config", response_model=PebblesInit)
async def config_route() -> PebblesInit:
    return get_config()


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions_route(ctx: GameContext = Depends(get_context)) -> SessionListResponse:
    return SessionListResponse(sessions=list_sessions(r=ctx.r))


@router.get("/players/{player_id}/state", response_model=None)
async def state_route(player_id: str, ctx: GameContext = Depends(get_context)) -> GameState | Response:
    state = query_state(ctx=ctx, player_id=player_id)
    if state is None:
        # No session is not an error; there is simply nothing to report.
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return state


@router.post("/players/{player_id}/turn", response_model=PebblesEvent)
async def turn_route(player_id: str, payload: TurnRequest, ctx: GameContext = Depends(get_context)) -> PebblesEvent:
    return cast(PebblesEvent, _dispatch(ctx, player_id, TurnAction(pebbles=payload.pebbles)))


@router.post("/players/{player_id}/give_up", response_model=PebblesEvent)
async def give_up_route(player_id: str, ctx: GameContext = Depends(get_context)) -> PebblesEvent:
    return cast(PebblesEvent, _dispatch(ctx, player_id, GiveUpAction()))


@router.post("/players/{player_id}/restart", response_model=GameState)
async def restart_route(player_id: str, payload: PebblesInit, ctx: GameContext = Depends(get_context)) -> GameState:
    action = RestartAction(
        difficulty=payload.difficulty,
        pebbles_count=payload.pebbles_count,
        max_pebbles_per_turn=payload.max_pebbles_per_turn,
    )
    return cast(GameState, _dispatch(ctx, player_id, action))


@router.post("/players/{player_id}/actions", response_model=None)
async def generic_action_route(
    player_id: str,
    body: dict[str, Any],
    ctx: GameContext = Depends(get_context),
) -> PebblesEvent | GameState:
    try:
        action = parse_action(body)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return _dispatch(ctx, player_id, action)


@router.get("/players/{player_id}/mailbox")
async def get_player_mailbox_route(
    player_id: str,
    count: int = 20,
    start: str = "-",
    end: str = "+",
    ctx: GameContext = Depends(get_context),
) -> dict[str, object]:
    """Debug endpoint: read a player's mailbox Redis Stream.

    Intended for local/dev testing when redis-cli isn't available.
    """

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    mailbox = Mailbox(player_id=player_id)
    try:
        entries = read_mailbox(r=ctx.r, mailbox=mailbox, count=count, start=start, end=end)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    messages = [{"id": mid, "fields": fields} for mid, fields in entries]
    return {"player_id": player_id, "stream": mailbox.key, "messages": messages}
