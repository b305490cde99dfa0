from __future__ import annotations

import logging
from collections.abc import Iterable

from tablewait.application.dto.responses import RestaurantStatusResponse, WaitlistQueueResponse
from tablewait.application.mappers.event_envelope import (
    serialize_queue_updated_event,
    serialize_status_evaluated_event,
)
from tablewait.application.metrics.snapshot_metrics import (
    record_snapshot_publish_failure,
    record_snapshot_recompute,
)
from tablewait.application.ports.clock import Clock
from tablewait.application.ports.publisher import EventPublisher, restaurant_channel
from tablewait.application.use_cases.context import TraceContext
from tablewait.application.use_cases.get_restaurant_status import build_restaurant_status
from tablewait.application.use_cases.get_waitlist_queue import build_waitlist_queue
from tablewait.config import Settings, load_settings
from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.hours.entities import RestaurantHourRow
from tablewait.domain.waitlist.entities import WaitlistEntry

logger = logging.getLogger(__name__)


class RecomputeOnSnapshot:
    """Re-evaluates a restaurant each time the change feed delivers a snapshot.

    Nothing is cached between calls: every snapshot is evaluated on its own and
    the result is published on the restaurant's event channel.
    """

    def __init__(
        self,
        clock: Clock,
        publisher: EventPublisher,
        settings: Settings | None = None,
    ) -> None:
        self._clock = clock
        self._publisher = publisher
        self._settings = settings or load_settings()

    def on_waitlist_snapshot(
        self,
        restaurant_id: RestaurantId,
        entries: Iterable[WaitlistEntry],
        trace_ctx: TraceContext | None = None,
    ) -> WaitlistQueueResponse:
        trace_ctx = trace_ctx or TraceContext.from_current_span()
        now = self._clock.now()
        queue = build_waitlist_queue(
            restaurant_id=restaurant_id,
            entries=entries,
            now=now,
            settings=self._settings,
        )
        record_snapshot_recompute(kind="waitlist")

        message = serialize_queue_updated_event(
            occurred_at=now,
            queue=queue,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        self._publish(restaurant_id, message, kind="waitlist")
        return queue

    def on_hours_snapshot(
        self,
        restaurant_id: RestaurantId,
        rows: Iterable[RestaurantHourRow],
        trace_ctx: TraceContext | None = None,
    ) -> RestaurantStatusResponse:
        trace_ctx = trace_ctx or TraceContext.from_current_span()
        now = self._clock.now()
        status = build_restaurant_status(
            restaurant_id=restaurant_id,
            rows=rows,
            now=now,
            settings=self._settings,
        )
        record_snapshot_recompute(kind="hours")

        message = serialize_status_evaluated_event(
            occurred_at=now,
            status=status,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        self._publish(restaurant_id, message, kind="hours")
        return status

    def _publish(self, restaurant_id: RestaurantId, message: str, kind: str) -> None:
        channel = restaurant_channel(restaurant_id)
        try:
            self._publisher.publish(channel=channel, message=message)
        except Exception:
            record_snapshot_publish_failure(kind=kind)
            logger.exception(
                "snapshot_publish_failed",
                extra={"restaurant_id": str(restaurant_id), "channel": channel, "kind": kind},
            )
