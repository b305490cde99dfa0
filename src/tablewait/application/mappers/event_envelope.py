from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from tablewait.application.dto.responses import RestaurantStatusResponse, WaitlistQueueResponse


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    restaurant_id: str,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "restaurant_id": restaurant_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def serialize_queue_updated_event(
    *,
    occurred_at: datetime,
    queue: WaitlistQueueResponse,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type="waitlist.queue_updated",
        occurred_at=occurred_at,
        restaurant_id=queue.restaurantId,
        trace_id=trace_id,
        request_id=request_id,
        payload=queue.model_dump(mode="json"),
    )


def serialize_status_evaluated_event(
    *,
    occurred_at: datetime,
    status: RestaurantStatusResponse,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type="hours.status_evaluated",
        occurred_at=occurred_at,
        restaurant_id=status.restaurantId,
        trace_id=trace_id,
        request_id=request_id,
        payload=status.model_dump(mode="json"),
    )
