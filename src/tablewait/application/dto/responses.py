from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class QueuePositionResponse(BaseModel):
    entryId: str
    restaurantId: str
    position: int
    totalInQueue: int
    partiesAhead: int
    estimatedMinutes: int
    waitedMinutes: int
    progress: float


class WaitlistQueueResponse(BaseModel):
    restaurantId: str
    totalInQueue: int
    entries: list[QueuePositionResponse] = Field(default_factory=list)
    computedAt: datetime


class RestaurantStatusResponse(BaseModel):
    restaurantId: str
    status: str
    label: str
    minutesUntilChange: int | None = None
    changesAt: datetime | None = None
    skippedRows: int = 0
    evaluatedAt: datetime


class ClosedRestaurantsResponse(BaseModel):
    restaurantIds: list[str] = Field(default_factory=list)
    evaluatedAt: datetime
