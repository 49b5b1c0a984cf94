from __future__ import annotations

from dataclasses import dataclass, field

import redis

from pebbles.api.models import PebblesInit
from pebbles.randomness import RandomSource


@dataclass(frozen=True, slots=True)
class GameContext:
    """Everything an action needs, built once per request and passed explicitly.

    - `r`: the session store / mailbox backend.
    - `init`: configuration for sessions created on first contact.
    - `rng`: randomness for the computer opponent and first-player rolls.
    """

    r: redis.Redis
    init: PebblesInit
    rng: RandomSource = field(default_factory=RandomSource)
