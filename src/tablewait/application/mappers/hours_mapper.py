from __future__ import annotations

from datetime import datetime

from tablewait.application.dto.responses import RestaurantStatusResponse
from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.hours.status import RestaurantStatusResult


def to_restaurant_status_response(
    restaurant_id: RestaurantId,
    result: RestaurantStatusResult,
    evaluated_at: datetime,
) -> RestaurantStatusResponse:
    return RestaurantStatusResponse(
        restaurantId=str(restaurant_id),
        status=result.status.value,
        label=result.label,
        minutesUntilChange=result.minutes_until_change,
        changesAt=result.changes_at,
        skippedRows=result.skipped_rows,
        evaluatedAt=evaluated_at,
    )
