"""Randomness adapter used by the computer opponent and the first-player roll.

The engine only needs "one uniformly random 32-bit value" from the outside
world. Everything else (ranges, coin flips) is derived here so tests can swap
the entropy source for a deterministic one.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from pebbles.api.models import Player


logger = logging.getLogger(__name__)

U32_MASK = 0xFFFF_FFFF

EntropySource = Callable[[], int]


class RandomnessUnavailable(RuntimeError):
    """The entropy source could not produce a value."""


_SYSTEM_RANDOM = random.SystemRandom()


def system_entropy() -> int:
    return _SYSTEM_RANDOM.getrandbits(32)


class RandomSource:
    def __init__(self, entropy: EntropySource | None = None):
        self._entropy = entropy or system_entropy

    def next_u32(self) -> int:
        try:
            value = self._entropy()
        except (OSError, StopIteration) as e:
            logger.warning("entropy source failed: %r", e)
            raise RandomnessUnavailable("random call failed") from e
        return value & U32_MASK

    def next_in_range(self, k: int) -> int:
        """Return a value in [1, k].

        Derived as 1 + (u32 mod k); the slight bias when k does not divide
        2**32 is accepted.
        """

        if k < 1:
            raise ValueError("k must be at least 1")
        return 1 + (self.next_u32() % k)

    def coin_flip(self) -> Player:
        return Player.user if self.next_u32() % 2 == 0 else Player.program
