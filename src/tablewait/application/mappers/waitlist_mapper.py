from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from tablewait.application.dto.responses import QueuePositionResponse, WaitlistQueueResponse
from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.waitlist.positions import QueuePosition


def to_queue_position_response(
    restaurant_id: RestaurantId,
    queue_position: QueuePosition,
) -> QueuePositionResponse:
    return QueuePositionResponse(
        entryId=str(queue_position.entry_id),
        restaurantId=str(restaurant_id),
        position=queue_position.position,
        totalInQueue=queue_position.total_in_queue,
        partiesAhead=queue_position.parties_ahead,
        estimatedMinutes=queue_position.estimated_minutes,
        waitedMinutes=queue_position.waited_minutes,
        progress=queue_position.progress,
    )


def to_waitlist_queue_response(
    restaurant_id: RestaurantId,
    positions: Iterable[QueuePosition],
    computed_at: datetime,
) -> WaitlistQueueResponse:
    ordered = sorted(positions, key=lambda item: item.position)
    return WaitlistQueueResponse(
        restaurantId=str(restaurant_id),
        totalInQueue=len(ordered),
        entries=[to_queue_position_response(restaurant_id, item) for item in ordered],
        computedAt=computed_at,
    )
