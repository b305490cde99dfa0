from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from tablewait.application.dto.responses import RestaurantStatusResponse
from tablewait.application.mappers.hours_mapper import to_restaurant_status_response
from tablewait.application.metrics.snapshot_metrics import record_status_evaluation
from tablewait.application.ports.clock import Clock
from tablewait.application.ports.snapshots import HoursSnapshotSource
from tablewait.config import Settings, load_settings
from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.hours.entities import RestaurantHourRow
from tablewait.domain.hours.status import evaluate_status


def build_restaurant_status(
    restaurant_id: RestaurantId,
    rows: Iterable[RestaurantHourRow],
    now: datetime,
    settings: Settings,
) -> RestaurantStatusResponse:
    result = evaluate_status(
        rows,
        now,
        business_time_zone=settings.business_time_zone,
        soon_threshold_minutes=settings.soon_threshold_minutes,
    )
    record_status_evaluation(
        restaurant_id=str(restaurant_id),
        status=result.status.value,
        skipped_rows=result.skipped_rows,
    )
    return to_restaurant_status_response(restaurant_id, result, evaluated_at=now)


class GetRestaurantStatus:
    def __init__(
        self,
        hours_source: HoursSnapshotSource,
        clock: Clock,
        settings: Settings | None = None,
    ) -> None:
        self._hours_source = hours_source
        self._clock = clock
        self._settings = settings or load_settings()

    def execute(self, restaurant_id: RestaurantId) -> RestaurantStatusResponse:
        rows = self._hours_source.list_hours(restaurant_id)
        return build_restaurant_status(
            restaurant_id=restaurant_id,
            rows=rows,
            now=self._clock.now(),
            settings=self._settings,
        )
