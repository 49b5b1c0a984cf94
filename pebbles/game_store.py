from __future__ import annotations

import redis
from redis.client import Pipeline

from pebbles.api.models import GameState, PebblesInit, PlayerSession
from pebbles.game_engine import new_session


SESSIONS_SET_KEY = "pebbles:sessions"
SESSION_KEY_PREFIX = "pebbles:session:"  # + {player_id}


def _session_key(player_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{player_id}"


def get_session(*, r: redis.Redis, player_id: str) -> GameState | None:
    raw = r.get(_session_key(player_id))
    if not raw:
        return None
    return GameState.model_validate_json(raw)


def get_or_create_session(*, r: redis.Redis, player_id: str, config: PebblesInit) -> GameState:
    """Return the stored session, or a fresh one built from `config`.

    A fresh session is not written here; it only lands in Redis once the caller
    commits it with `save_session`.
    """

    state = get_session(r=r, player_id=player_id)
    if state is None:
        state = new_session(config=config)
    return state


def queue_save_session(*, pipe: Pipeline, player_id: str, state: GameState) -> None:
    pipe.set(_session_key(player_id), state.model_dump_json())
    pipe.sadd(SESSIONS_SET_KEY, player_id)


def queue_remove_session(*, pipe: Pipeline, player_id: str) -> None:
    pipe.delete(_session_key(player_id))
    pipe.srem(SESSIONS_SET_KEY, player_id)


def save_session(*, r: redis.Redis, player_id: str, state: GameState) -> None:
    pipe = r.pipeline(transaction=True)
    queue_save_session(pipe=pipe, player_id=player_id, state=state)
    pipe.execute()


def remove_session(*, r: redis.Redis, player_id: str) -> None:
    pipe = r.pipeline(transaction=True)
    queue_remove_session(pipe=pipe, player_id=player_id)
    pipe.execute()


def list_sessions(*, r: redis.Redis) -> list[PlayerSession]:
    out: list[PlayerSession] = []
    # Stable order by player id.
    for player_id in sorted(r.smembers(SESSIONS_SET_KEY)):
        state = get_session(r=r, player_id=player_id)
        if state is not None:
            out.append(PlayerSession(player_id=player_id, state=state))
    return out
