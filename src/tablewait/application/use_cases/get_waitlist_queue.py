from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from tablewait.application.dto.responses import WaitlistQueueResponse
from tablewait.application.mappers.waitlist_mapper import to_waitlist_queue_response
from tablewait.application.metrics.snapshot_metrics import record_queue_size
from tablewait.application.ports.clock import Clock
from tablewait.application.ports.snapshots import WaitlistSnapshotSource
from tablewait.config import Settings, load_settings
from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.waitlist.entities import WaitlistEntry
from tablewait.domain.waitlist.positions import compute_positions


def build_waitlist_queue(
    restaurant_id: RestaurantId,
    entries: Iterable[WaitlistEntry],
    now: datetime,
    settings: Settings,
) -> WaitlistQueueResponse:
    positions = compute_positions(entries, now, settings.avg_minutes_per_party)
    record_queue_size(restaurant_id=str(restaurant_id), size=len(positions))
    return to_waitlist_queue_response(restaurant_id, positions.values(), computed_at=now)


class GetWaitlistQueue:
    def __init__(
        self,
        waitlist_source: WaitlistSnapshotSource,
        clock: Clock,
        settings: Settings | None = None,
    ) -> None:
        self._waitlist_source = waitlist_source
        self._clock = clock
        self._settings = settings or load_settings()

    def execute(self, restaurant_id: RestaurantId) -> WaitlistQueueResponse:
        entries = self._waitlist_source.list_entries(restaurant_id)
        return build_waitlist_queue(
            restaurant_id=restaurant_id,
            entries=entries,
            now=self._clock.now(),
            settings=self._settings,
        )
