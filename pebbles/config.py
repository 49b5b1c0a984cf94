from __future__ import annotations

import os

from pebbles.api.models import DifficultyLevel, PebblesInit


_INIT: PebblesInit | None = None


def load_init_from_env() -> PebblesInit:
    """Build the initial game configuration from the environment.

    Raises pydantic's ValidationError (a ValueError) for an invalid setup, so a
    misconfigured process fails at startup instead of serving broken sessions.
    """

    return PebblesInit(
        difficulty=DifficultyLevel(os.environ.get("PEBBLES_DIFFICULTY", "easy").strip().lower()),
        pebbles_count=int(os.environ.get("PEBBLES_COUNT", "15")),
        max_pebbles_per_turn=int(os.environ.get("PEBBLES_MAX_PER_TURN", "3")),
    )


def init_config(*, init: PebblesInit | None = None) -> PebblesInit:
    """Capture the initial configuration once.

    Safe to call multiple times; subsequent calls return the already captured instance.
    """

    global _INIT
    if _INIT is None:
        _INIT = init if init is not None else load_init_from_env()
    return _INIT


def reset_config_for_tests() -> None:
    global _INIT
    _INIT = None


def get_config() -> PebblesInit:
    if _INIT is None:
        raise RuntimeError("Config not initialized. Call init_config() at startup.")
    return _INIT


DEFAULT_REDIS_URL = "redis://localhost:6379/0"


def get_redis_url() -> str:
    """Session store location: PEBBLES_REDIS_URL, then the conventional REDIS_URL."""

    return os.environ.get("PEBBLES_REDIS_URL") or os.environ.get("REDIS_URL") or DEFAULT_REDIS_URL
