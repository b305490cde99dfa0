from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytz
from pytz.tzinfo import BaseTzInfo

from tablewait.domain.common.errors import InvalidArgumentError
from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.common.timestamps import require_aware
from tablewait.domain.hours.entities import (
    SECONDS_PER_DAY,
    RestaurantHourRow,
    RestaurantOpenStatus,
    ShiftWindow,
    parse_hour_row,
)

logger = logging.getLogger(__name__)

DEFAULT_SOON_THRESHOLD_MINUTES = 30
LOOKAHEAD_DAYS = 7
NO_SCHEDULE_LABEL = "Hours unavailable"

_DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class RestaurantStatusResult:
    status: RestaurantOpenStatus
    label: str
    minutes_until_change: int | None
    changes_at: datetime | None
    skipped_rows: int = 0


@dataclass(frozen=True)
class _Span:
    start: datetime
    end: datetime


def resolve_time_zone(name: object) -> BaseTzInfo:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError("business_time_zone must be a non-empty IANA name")
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as exc:
        raise InvalidArgumentError(f"unknown business_time_zone: {name}") from exc


def _validate_threshold(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError("soon_threshold_minutes must be an integer")
    if value < 0:
        raise InvalidArgumentError("soon_threshold_minutes must be >= 0")
    return value


def _sunday_index(day: date) -> int:
    return (day.weekday() + 1) % 7


def _format_clock(moment: datetime) -> str:
    period = "PM" if moment.hour >= 12 else "AM"
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment.minute:02d} {period}"


def _parse_windows(rows: Iterable[RestaurantHourRow]) -> tuple[list[ShiftWindow], int]:
    windows: list[ShiftWindow] = []
    skipped = 0
    for row in rows:
        window = parse_hour_row(row)
        if window is None:
            skipped += 1
            logger.debug(
                "hour_row_skipped",
                extra={
                    "restaurant_id": row.restaurant_id,
                    "day_of_week": row.day_of_week,
                },
            )
            continue
        windows.append(window)
    return windows, skipped


def _timeline(windows: list[ShiftWindow], today: date) -> list[_Span]:
    # Yesterday is included so an overnight shift started then still covers today.
    spans: list[_Span] = []
    for offset in range(-1, LOOKAHEAD_DAYS + 1):
        day = today + timedelta(days=offset)
        midnight = datetime.combine(day, datetime.min.time())
        weekday = _sunday_index(day)
        for window in windows:
            if window.day_of_week != weekday:
                continue
            closes_at = window.closes_at
            if window.crosses_midnight:
                closes_at += SECONDS_PER_DAY
            start = midnight + timedelta(seconds=window.opens_at)
            end = midnight + timedelta(seconds=closes_at)
            if end > start:
                spans.append(_Span(start=start, end=end))

    spans.sort(key=lambda span: (span.start, span.end))
    merged: list[_Span] = []
    for span in spans:
        if merged and span.start <= merged[-1].end:
            if span.end > merged[-1].end:
                merged[-1] = _Span(start=merged[-1].start, end=span.end)
            continue
        merged.append(span)
    return merged


def _minutes_between(
    now: datetime,
    local_wall: datetime,
    zone: BaseTzInfo,
) -> tuple[int, datetime]:
    instant = zone.localize(local_wall)
    return int((instant - now).total_seconds() // 60), instant


def _open_until_label(end: datetime, wall_now: datetime) -> str:
    # Closes less than a day away show only the clock time.
    if end - wall_now < timedelta(days=1):
        return f"Open until {_format_clock(end)}"
    return f"Open until {_DAY_NAMES[_sunday_index(end.date())]} {_format_clock(end)}"


def _opens_label(start: datetime, today: date) -> str:
    days_ahead = (start.date() - today).days
    clock = _format_clock(start)
    if days_ahead == 0:
        return f"Opens at {clock}"
    if days_ahead == 1:
        return f"Opens Tomorrow at {clock}"
    return f"Opens {_DAY_NAMES[_sunday_index(start.date())]} at {clock}"


def evaluate_status(
    hours: Iterable[RestaurantHourRow],
    now: datetime,
    business_time_zone: str,
    soon_threshold_minutes: int = DEFAULT_SOON_THRESHOLD_MINUTES,
) -> RestaurantStatusResult:
    """Work out whether a restaurant is open at ``now`` from its weekly hours.

    Everything is compared in the restaurant's local wall time. Intervals are
    ``[open, close)``; a row whose close is not after its open runs past
    midnight into the next day. Minute counts are floored, and a span with less
    than a minute left is treated as already closed.
    """
    current = require_aware(now, "now")
    zone = resolve_time_zone(business_time_zone)
    threshold = _validate_threshold(soon_threshold_minutes)

    windows, skipped = _parse_windows(hours)

    local_now = current.astimezone(zone)
    today = local_now.date()
    wall_now = local_now.replace(tzinfo=None)
    horizon = wall_now + timedelta(days=LOOKAHEAD_DAYS)

    spans = _timeline(windows, today)

    for span in spans:
        if not span.start <= wall_now < span.end:
            continue
        if span.end >= horizon:
            return RestaurantStatusResult(
                status=RestaurantOpenStatus.OPEN,
                label="Open 24 hours",
                minutes_until_change=None,
                changes_at=None,
                skipped_rows=skipped,
            )
        minutes_left, closes_at = _minutes_between(current, span.end, zone)
        if minutes_left < 1:
            break
        if minutes_left < threshold:
            return RestaurantStatusResult(
                status=RestaurantOpenStatus.CLOSING_SOON,
                label=f"Closes in {minutes_left}m",
                minutes_until_change=minutes_left,
                changes_at=closes_at,
                skipped_rows=skipped,
            )
        return RestaurantStatusResult(
            status=RestaurantOpenStatus.OPEN,
            label=_open_until_label(span.end, wall_now),
            minutes_until_change=minutes_left,
            changes_at=closes_at,
            skipped_rows=skipped,
        )

    for span in spans:
        if span.start <= wall_now:
            continue
        if span.start > horizon:
            break
        minutes_until, opens_at = _minutes_between(current, span.start, zone)
        if minutes_until < threshold:
            return RestaurantStatusResult(
                status=RestaurantOpenStatus.OPENING_SOON,
                label=f"Opens in {minutes_until}m",
                minutes_until_change=minutes_until,
                changes_at=opens_at,
                skipped_rows=skipped,
            )
        return RestaurantStatusResult(
            status=RestaurantOpenStatus.CLOSED,
            label=_opens_label(span.start, today),
            minutes_until_change=minutes_until,
            changes_at=opens_at,
            skipped_rows=skipped,
        )

    return RestaurantStatusResult(
        status=RestaurantOpenStatus.CLOSED,
        label=NO_SCHEDULE_LABEL,
        minutes_until_change=None,
        changes_at=None,
        skipped_rows=skipped,
    )


def evaluate_many(
    rows: Iterable[RestaurantHourRow],
    now: datetime,
    business_time_zone: str,
    soon_threshold_minutes: int = DEFAULT_SOON_THRESHOLD_MINUTES,
) -> dict[RestaurantId, RestaurantStatusResult]:
    require_aware(now, "now")
    resolve_time_zone(business_time_zone)
    _validate_threshold(soon_threshold_minutes)

    grouped: dict[RestaurantId, list[RestaurantHourRow]] = {}
    for row in rows:
        if row.restaurant_id is None:
            continue
        grouped.setdefault(row.restaurant_id, []).append(row)

    return {
        restaurant_id: evaluate_status(
            group,
            now,
            business_time_zone,
            soon_threshold_minutes,
        )
        for restaurant_id, group in grouped.items()
    }
