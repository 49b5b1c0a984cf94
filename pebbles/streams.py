from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import redis
from redis.client import Pipeline


@dataclass(frozen=True, slots=True)
class Mailbox:
    player_id: str

    @property
    def key(self) -> str:
        return f"mailbox:{self.player_id}"


def queue_to_mailbox(*, pipe: Pipeline, mailbox: Mailbox, fields: Mapping[str, str]) -> None:
    """Queue an XADD to a player's mailbox on `pipe`.

    The entry id comes back from `pipe.execute()`, so the reply lands in the
    same transaction as the session write it describes.
    """

    pipe.xadd(mailbox.key, {str(k): str(v) for k, v in fields.items()})


def read_mailbox(
    *,
    r: redis.Redis,
    mailbox: Mailbox,
    count: int = 20,
    start: str = "-",
    end: str = "+",
) -> list[tuple[str, dict[str, str]]]:
    return r.xrange(mailbox.key, min=start, max=end, count=count)
