from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import cast

from pebbles.api.models import (
    GameState,
    GiveUpAction,
    PebblesAction,
    PebblesEvent,
    RestartAction,
    TurnAction,
)
from pebbles.context import GameContext
from pebbles.game_engine import apply_turn, give_up, restart
from pebbles.game_store import get_or_create_session, get_session, queue_remove_session, queue_save_session
from pebbles.lock import player_lock
from pebbles.streams import Mailbox, queue_to_mailbox


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of dispatching one action.

    - `reply`: what goes back to the caller (an event, or the full state on restart).
    - `state`: the session after the action, or None if the game concluded and was dropped.
    """

    reply: PebblesEvent | GameState
    state: GameState | None
    mailbox_entry_ids: list[str]


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()


def _mailbox_fields_for_reply(*, player_id: str, reply: PebblesEvent | GameState) -> dict[str, str]:
    fields = {"player_id": player_id, "ts": _now_iso()}
    if isinstance(reply, GameState):
        fields["type"] = "game_state"
        fields["state"] = reply.model_dump_json()
        return fields

    fields["type"] = reply.type.value
    if reply.pebbles is not None:
        fields["pebbles"] = str(reply.pebbles)
    if reply.winner is not None:
        fields["winner"] = reply.winner.value
    return fields


def dispatch_action(*, ctx: GameContext, player_id: str, action: PebblesAction) -> ActionResult:
    """Entry point for every write action from a player.

    Applies an action by:
    - acquiring the player's lock
    - loading the session (or materializing one from the init config)
    - applying the action via the session state machine
    - saving the session, or removing it once a winner is set
    - recording the reply in the player's mailbox

    Nothing is written until the action fully succeeded.
    """

    with player_lock(r=ctx.r, player_id=player_id):
        state = get_or_create_session(r=ctx.r, player_id=player_id, config=ctx.init)
        logger.debug("player=%s action=%s remaining=%s", player_id, action.action, state.pebbles_remaining)

        reply: PebblesEvent | GameState
        if isinstance(action, TurnAction):
            reply = apply_turn(state=state, pebbles=action.pebbles, rng=ctx.rng)
        elif isinstance(action, GiveUpAction):
            reply = give_up(state=state)
        elif isinstance(action, RestartAction):
            reply = restart(state=state, config=action.to_config(), rng=ctx.rng)
        else:
            raise ValueError(f"Unknown action: {action!r}")

        # Session write and mailbox entry commit together or not at all.
        pipe = ctx.r.pipeline(transaction=True)
        kept: GameState | None
        if state.winner is not None:
            queue_remove_session(pipe=pipe, player_id=player_id)
            kept = None
        else:
            queue_save_session(pipe=pipe, player_id=player_id, state=state)
            kept = state
        queue_to_mailbox(
            pipe=pipe,
            mailbox=Mailbox(player_id=player_id),
            fields=_mailbox_fields_for_reply(player_id=player_id, reply=reply),
        )
        entry_id = cast(str, pipe.execute()[-1])

        if state.winner is not None:
            logger.info("player=%s game concluded winner=%s", player_id, state.winner.value)
        return ActionResult(reply=reply, state=kept, mailbox_entry_ids=[entry_id])


def query_state(*, ctx: GameContext, player_id: str) -> GameState | None:
    """Read-only: the player's current session, if any."""

    return get_session(r=ctx.r, player_id=player_id)
