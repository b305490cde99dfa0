from __future__ import annotations

from tablewait.application.dto.responses import QueuePositionResponse
from tablewait.application.mappers.waitlist_mapper import to_queue_position_response
from tablewait.application.ports.clock import Clock
from tablewait.application.ports.snapshots import WaitlistSnapshotSource
from tablewait.config import Settings, load_settings
from tablewait.domain.common.ids import EntryId, RestaurantId
from tablewait.domain.waitlist.positions import position_for


class EntryNotQueuedError(Exception):
    def __init__(self, message: str, status: str | None) -> None:
        super().__init__(message)
        self.status = status
        self.details = {"status": status}


class GetQueuePosition:
    def __init__(
        self,
        waitlist_source: WaitlistSnapshotSource,
        clock: Clock,
        settings: Settings | None = None,
    ) -> None:
        self._waitlist_source = waitlist_source
        self._clock = clock
        self._settings = settings or load_settings()

    def execute(self, restaurant_id: RestaurantId, entry_id: EntryId) -> QueuePositionResponse:
        entries = self._waitlist_source.list_entries(restaurant_id)
        queue_position = position_for(
            entries,
            entry_id,
            now=self._clock.now(),
            avg_minutes_per_party=self._settings.avg_minutes_per_party,
        )
        if queue_position is None:
            current = next((entry for entry in entries if entry.entry_id == entry_id), None)
            status = current.status.value if current is not None else None
            raise EntryNotQueuedError(
                f"entry is not queued for restaurant_id={restaurant_id}, entry_id={entry_id}",
                status=status,
            )
        return to_queue_position_response(restaurant_id, queue_position)
