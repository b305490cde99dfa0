from __future__ import annotations

from typing import Protocol

from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.hours.entities import RestaurantHourRow
from tablewait.domain.waitlist.entities import WaitlistEntry


class WaitlistSnapshotSource(Protocol):
    def list_entries(self, restaurant_id: RestaurantId) -> list[WaitlistEntry]: ...


class HoursSnapshotSource(Protocol):
    def list_hours(self, restaurant_id: RestaurantId) -> list[RestaurantHourRow]: ...

    def list_all_hours(self) -> list[RestaurantHourRow]: ...
