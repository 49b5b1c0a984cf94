from __future__ import annotations

from collections.abc import Generator

import redis
from fastapi import Depends

from pebbles.config import get_config
from pebbles.context import GameContext
from pebbles.infra.redis_client import create_redis
from pebbles.randomness import RandomSource


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        try:
            client.close()
        except Exception:
            # Some redis client versions don't require explicit close.
            pass


def get_rng() -> RandomSource:
    return RandomSource()


def get_context(
    r: redis.Redis = Depends(get_redis),
    rng: RandomSource = Depends(get_rng),
) -> GameContext:
    return GameContext(r=r, init=get_config(), rng=rng)
