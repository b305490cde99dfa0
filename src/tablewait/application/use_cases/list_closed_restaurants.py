from __future__ import annotations

from tablewait.application.dto.responses import ClosedRestaurantsResponse
from tablewait.application.metrics.snapshot_metrics import record_status_evaluation
from tablewait.application.ports.clock import Clock
from tablewait.application.ports.snapshots import HoursSnapshotSource
from tablewait.config import Settings, load_settings
from tablewait.domain.hours.entities import RestaurantOpenStatus
from tablewait.domain.hours.status import evaluate_many


class ListClosedRestaurants:
    """Ids of every restaurant whose hours put it in the plain ``closed`` state.

    ``opening_soon`` and ``closing_soon`` do not count as closed.
    """

    def __init__(
        self,
        hours_source: HoursSnapshotSource,
        clock: Clock,
        settings: Settings | None = None,
    ) -> None:
        self._hours_source = hours_source
        self._clock = clock
        self._settings = settings or load_settings()

    def execute(self) -> ClosedRestaurantsResponse:
        now = self._clock.now()
        results = evaluate_many(
            self._hours_source.list_all_hours(),
            now,
            business_time_zone=self._settings.business_time_zone,
            soon_threshold_minutes=self._settings.soon_threshold_minutes,
        )

        closed: list[str] = []
        for restaurant_id, result in results.items():
            record_status_evaluation(
                restaurant_id=str(restaurant_id),
                status=result.status.value,
                skipped_rows=result.skipped_rows,
            )
            if result.status == RestaurantOpenStatus.CLOSED:
                closed.append(str(restaurant_id))

        return ClosedRestaurantsResponse(restaurantIds=sorted(closed), evaluatedAt=now)
