from __future__ import annotations

from tablewait.application.dto.requests import RestaurantSnapshotRequest
from tablewait.domain.common.ids import EntryId, RestaurantId
from tablewait.domain.hours.entities import RestaurantHourRow
from tablewait.domain.waitlist.entities import WaitlistEntry


def to_waitlist_entries(snapshot: RestaurantSnapshotRequest) -> list[WaitlistEntry]:
    restaurant_id = RestaurantId(snapshot.restaurant_id)
    return [
        WaitlistEntry(
            entry_id=EntryId(item.id),
            restaurant_id=restaurant_id,
            party_size=item.party_size,
            status=item.status,
            joined_at=item.joined_at,
            notified_at=item.notified_at,
        )
        for item in snapshot.waitlist
    ]


def to_hour_rows(snapshot: RestaurantSnapshotRequest) -> list[RestaurantHourRow]:
    restaurant_id = RestaurantId(snapshot.restaurant_id)
    return [
        RestaurantHourRow(
            day_of_week=item.day_of_week,
            open_time=item.open_time,
            close_time=item.close_time,
            restaurant_id=restaurant_id,
        )
        for item in snapshot.hours
    ]
