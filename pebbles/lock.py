from __future__ import annotations

import logging
from contextlib import contextmanager

import redis
from redis.exceptions import LockNotOwnedError


logger = logging.getLogger(__name__)


def lock_key(player_id: str) -> str:
    return f"lock:player:{player_id}"


@contextmanager
def player_lock(*, r: redis.Redis, player_id: str, ttl_ms: int = 5_000):
    """Per-player lock serializing actions for one identity.

    Backed by redis-py's token-checked Lock: release only deletes the key while
    it still holds this holder's token, so a holder that outlived `ttl_ms`
    cannot free a lock someone else has since taken.
    """

    lock = r.lock(lock_key(player_id), timeout=ttl_ms / 1000, blocking=False)
    if not lock.acquire():
        raise ValueError("Session is busy")
    try:
        yield
    finally:
        try:
            lock.release()
        except LockNotOwnedError:
            logger.warning("player=%s lock expired before release (ttl_ms=%s)", player_id, ttl_ms)
