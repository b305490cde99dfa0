from __future__ import annotations

from typing import Protocol

from tablewait.domain.common.ids import RestaurantId


class EventPublisher(Protocol):
    def publish(self, channel: str, message: str) -> None: ...


def restaurant_channel(restaurant_id: RestaurantId) -> str:
    return f"events:{restaurant_id}"
