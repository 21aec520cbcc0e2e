from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, cast

import redis


@dataclass(frozen=True, slots=True)
class Mailbox:
    game_id: str
    player_id: str

    @property
    def key(self) -> str:
        return f"mailbox:{self.game_id}:{self.player_id}"


def publish_many(*, r: redis.Redis, entries: Sequence[tuple[str, Mapping[str, str]]]) -> list[str]:
    ids: list[str] = []
    for key, fields in entries:
        stream_id = r.xadd(key, {str(k): str(v) for k, v in fields.items()})
        ids.append(cast(str, stream_id))
    return ids


def read_mailbox(
    *, r: redis.Redis, mailbox: Mailbox, start: str = "-", end: str = "+", count: int = 20
) -> list[tuple[str, dict[str, str]]]:
    entries = r.xrange(mailbox.key, min=start, max=end, count=count)
    return [(cast(str, mid), dict(fields)) for mid, fields in entries]
