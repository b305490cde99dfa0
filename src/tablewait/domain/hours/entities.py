from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import time
from enum import Enum

from tablewait.domain.common.ids import RestaurantId

SECONDS_PER_DAY = 24 * 60 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


class RestaurantOpenStatus(str, Enum):
    OPEN = "open"
    OPENING_SOON = "opening_soon"
    CLOSING_SOON = "closing_soon"
    CLOSED = "closed"


@dataclass(frozen=True)
class RestaurantHourRow:
    """One row of a weekly hours table, as stored (day 0 is Sunday).

    Values are kept raw; rows are validated when evaluated, so a dirty row
    can be dropped without rejecting the rest of the table.
    """

    day_of_week: int
    open_time: str | time
    close_time: str | time
    restaurant_id: RestaurantId | None = None


@dataclass(frozen=True)
class ShiftWindow:
    day_of_week: int
    opens_at: int
    closes_at: int

    @property
    def crosses_midnight(self) -> bool:
        return self.closes_at <= self.opens_at


def parse_time_of_day(value: object, *, allow_end_of_day: bool = False) -> int | None:
    """Return seconds since midnight, or None when the value is not a time of day."""
    if isinstance(value, time):
        return value.hour * 3600 + value.minute * 60 + value.second
    if not isinstance(value, str):
        return None

    match = _TIME_PATTERN.match(value.strip())
    if match is None:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3) or 0)
    if minutes > 59 or seconds > 59:
        return None
    if hours == 24 and minutes == 0 and seconds == 0 and allow_end_of_day:
        return SECONDS_PER_DAY
    if hours > 23:
        return None
    return hours * 3600 + minutes * 60 + seconds


def parse_hour_row(row: RestaurantHourRow) -> ShiftWindow | None:
    day = row.day_of_week
    if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
        return None

    opens_at = parse_time_of_day(row.open_time)
    closes_at = parse_time_of_day(row.close_time, allow_end_of_day=True)
    if opens_at is None or closes_at is None:
        return None
    return ShiftWindow(day_of_week=day, opens_at=opens_at, closes_at=closes_at)
