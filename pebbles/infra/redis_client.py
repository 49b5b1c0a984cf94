from __future__ import annotations

import redis

from pebbles.config import get_redis_url


def create_redis(url: str | None = None) -> redis.Redis:
    """Client for the session store and mailboxes.

    Strings in/out (decode_responses) since sessions are stored as JSON and
    mailbox fields are plain strings.
    """

    return redis.Redis.from_url(url or get_redis_url(), decode_responses=True)
