from __future__ import annotations

from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from tablewait.domain.waitlist.entities import WaitlistStatus


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class WaitlistEntryRequest(CamelBaseModel):
    id: str
    party_size: int = Field(ge=1)
    status: WaitlistStatus
    joined_at: AwareDatetime
    notified_at: AwareDatetime | None = None


class HourRowRequest(CamelBaseModel):
    # Left loosely typed: malformed rows are dropped during evaluation, not here.
    day_of_week: Any = None
    open_time: Any = None
    close_time: Any = None


class RestaurantSnapshotRequest(CamelBaseModel):
    restaurant_id: str
    time_zone: str | None = None
    waitlist: list[WaitlistEntryRequest] = Field(default_factory=list)
    hours: list[HourRowRequest] = Field(default_factory=list)
