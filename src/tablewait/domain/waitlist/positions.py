from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from tablewait.domain.common.errors import InvalidArgumentError
from tablewait.domain.common.ids import EntryId
from tablewait.domain.common.timestamps import require_aware
from tablewait.domain.waitlist.entities import WaitlistEntry


@dataclass(frozen=True)
class QueuePosition:
    entry_id: EntryId
    position: int
    total_in_queue: int
    estimated_minutes: int
    waited_minutes: int

    @property
    def parties_ahead(self) -> int:
        return self.position - 1

    @property
    def progress(self) -> float:
        """Fraction of the queue already behind this party, 1.0 at the front."""
        return (self.total_in_queue - self.position + 1) / self.total_in_queue


def _validate_avg(avg_minutes_per_party: object) -> float:
    if isinstance(avg_minutes_per_party, bool) or not isinstance(
        avg_minutes_per_party, (int, float)
    ):
        raise InvalidArgumentError("avg_minutes_per_party must be a number")
    if not math.isfinite(avg_minutes_per_party):
        raise InvalidArgumentError("avg_minutes_per_party must be finite")
    if avg_minutes_per_party < 0:
        raise InvalidArgumentError("avg_minutes_per_party must be >= 0")
    return float(avg_minutes_per_party)


def _queue_key(entry: WaitlistEntry) -> tuple[datetime, str]:
    return entry.joined_at, str(entry.entry_id)


def compute_positions(
    entries: Iterable[WaitlistEntry],
    now: datetime,
    avg_minutes_per_party: float,
) -> dict[EntryId, QueuePosition]:
    """Rank the waiting entries of one restaurant snapshot.

    Only ``waiting`` entries get a position; every other status is left out of
    the result entirely. Ordering is FIFO on ``joined_at`` with the entry id as
    the tie-break, so repeated calls over the same snapshot agree exactly.
    """
    current = require_aware(now, "now")
    avg = _validate_avg(avg_minutes_per_party)

    queued = sorted((entry for entry in entries if entry.is_queued), key=_queue_key)
    total = len(queued)

    positions: dict[EntryId, QueuePosition] = {}
    for index, entry in enumerate(queued):
        waited_seconds = (current - entry.joined_at).total_seconds()
        positions[entry.entry_id] = QueuePosition(
            entry_id=entry.entry_id,
            position=index + 1,
            total_in_queue=total,
            estimated_minutes=max(math.floor(index * avg), 0),
            waited_minutes=max(int(waited_seconds // 60), 0),
        )
    return positions


def position_for(
    entries: Iterable[WaitlistEntry],
    entry_id: EntryId,
    now: datetime,
    avg_minutes_per_party: float,
) -> QueuePosition | None:
    return compute_positions(entries, now, avg_minutes_per_party).get(entry_id)
