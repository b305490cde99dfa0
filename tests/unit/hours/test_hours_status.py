from __future__ import annotations

import sys
from datetime import datetime, time, timezone
from pathlib import Path

import pytest
import pytz

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from tablewait.domain.common.errors import InvalidArgumentError
from tablewait.domain.common.ids import RestaurantId
from tablewait.domain.hours.entities import RestaurantHourRow, RestaurantOpenStatus
from tablewait.domain.hours.status import (
    NO_SCHEDULE_LABEL,
    evaluate_many,
    evaluate_status,
)

CHICAGO = "America/Chicago"
_CHICAGO_TZ = pytz.timezone(CHICAGO)

# October 2026: the 13th is a Tuesday, 14th Wednesday, 16th Friday, 17th Saturday.
FRIDAY, SATURDAY, WEDNESDAY = 5, 6, 3


def _at(day: int, hour: int, minute: int = 0, second: int = 0, month: int = 10) -> datetime:
    return _CHICAGO_TZ.localize(datetime(2026, month, day, hour, minute, second))


def _row(day_of_week: object, open_time: object, close_time: object) -> RestaurantHourRow:
    return RestaurantHourRow(
        day_of_week=day_of_week,
        open_time=open_time,
        close_time=close_time,
    )


FRIDAY_LATE = [_row(FRIDAY, "22:00", "02:00")]
WEDNESDAY_DINNER = [_row(WEDNESDAY, "17:00", "23:00")]


def test_overnight_shift_is_open_after_midnight() -> None:
    result = evaluate_status(FRIDAY_LATE, _at(17, 1, 30), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open until 2:00 AM"
    assert result.minutes_until_change == 30
    assert result.changes_at == _at(17, 2, 0)


def test_overnight_shift_is_closed_at_its_close_time() -> None:
    result = evaluate_status(FRIDAY_LATE, _at(17, 2, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.CLOSED
    assert result.label == "Opens Fri at 10:00 PM"
    assert result.minutes_until_change == 6 * 1440 + 20 * 60


def test_overnight_shift_before_midnight() -> None:
    open_result = evaluate_status(FRIDAY_LATE, _at(16, 23, 0), CHICAGO)
    soon_result = evaluate_status(FRIDAY_LATE, _at(16, 21, 45), CHICAGO)

    assert open_result.status == RestaurantOpenStatus.OPEN
    assert open_result.minutes_until_change == 180
    assert soon_result.status == RestaurantOpenStatus.OPENING_SOON
    assert soon_result.label == "Opens in 15m"


def test_opening_soon_inside_threshold() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 16, 45), CHICAGO, soon_threshold_minutes=30)

    assert result.status == RestaurantOpenStatus.OPENING_SOON
    assert result.label == "Opens in 15m"
    assert result.minutes_until_change == 15
    assert result.changes_at == _at(14, 17, 0)


def test_closed_outside_threshold_reports_todays_opening() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 16, 0), CHICAGO, soon_threshold_minutes=30)

    assert result.status == RestaurantOpenStatus.CLOSED
    assert result.label == "Opens at 5:00 PM"
    assert result.minutes_until_change == 60


def test_threshold_boundary_is_not_soon() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 16, 30), CHICAGO, soon_threshold_minutes=30)

    assert result.status == RestaurantOpenStatus.CLOSED


def test_opening_minutes_are_floored() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 16, 59, 30), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPENING_SOON
    assert result.label == "Opens in 0m"


def test_open_at_exact_open_time() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 17, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open until 11:00 PM"
    assert result.minutes_until_change == 360


def test_closing_soon_reports_minutes_left() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 22, 45), CHICAGO)

    assert result.status == RestaurantOpenStatus.CLOSING_SOON
    assert result.label == "Closes in 15m"
    assert result.changes_at == _at(14, 23, 0)


def test_less_than_a_minute_left_counts_as_closed() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 22, 59, 30), CHICAGO)

    assert result.status == RestaurantOpenStatus.CLOSED
    assert result.label == "Opens Wed at 5:00 PM"
    assert result.minutes_until_change == 9720


def test_closed_at_close_time_points_to_next_week() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(14, 23, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.CLOSED
    assert result.label == "Opens Wed at 5:00 PM"
    assert result.minutes_until_change == 7 * 1440 - 6 * 60


def test_next_opening_tomorrow() -> None:
    result = evaluate_status(WEDNESDAY_DINNER, _at(13, 20, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.CLOSED
    assert result.label == "Opens Tomorrow at 5:00 PM"
    assert result.minutes_until_change == 21 * 60


def test_split_shifts() -> None:
    hours = [
        _row(WEDNESDAY, "11:30:00", "14:30:00"),
        _row(WEDNESDAY, "17:30:00", "22:00:00"),
    ]

    between = evaluate_status(hours, _at(14, 15, 0), CHICAGO)
    lunch_ending = evaluate_status(hours, _at(14, 14, 10), CHICAGO)
    lunch = evaluate_status(hours, _at(14, 12, 0), CHICAGO)

    assert between.status == RestaurantOpenStatus.CLOSED
    assert between.label == "Opens at 5:30 PM"
    assert between.minutes_until_change == 150
    assert lunch_ending.status == RestaurantOpenStatus.CLOSING_SOON
    assert lunch_ending.label == "Closes in 20m"
    assert lunch.status == RestaurantOpenStatus.OPEN
    assert lunch.label == "Open until 2:30 PM"


def test_back_to_back_shifts_read_as_one_span() -> None:
    hours = [_row(WEDNESDAY, "10:00", "14:00"), _row(WEDNESDAY, "14:00", "18:00")]

    result = evaluate_status(hours, _at(14, 13, 50), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open until 6:00 PM"
    assert result.minutes_until_change == 250


def test_midnight_hand_over_reads_as_one_span() -> None:
    hours = [_row(FRIDAY, "18:00", "00:00"), _row(SATURDAY, "00:00", "02:00")]

    result = evaluate_status(hours, _at(16, 23, 45), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open until 2:00 AM"
    assert result.minutes_until_change == 135


@pytest.mark.parametrize("close_time", ["24:00", "00:00"])
def test_open_around_the_clock(close_time: str) -> None:
    hours = [_row(day, "00:00", close_time) for day in range(7)]

    result = evaluate_status(hours, _at(14, 3, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open 24 hours"
    assert result.minutes_until_change is None
    assert result.changes_at is None


def test_time_values_are_accepted() -> None:
    hours = [_row(WEDNESDAY, time(17, 0), time(23, 0))]

    result = evaluate_status(hours, _at(14, 16, 45), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPENING_SOON


def test_no_hours_is_closed_without_next_opening() -> None:
    result = evaluate_status([], _at(14, 12, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.CLOSED
    assert result.label == NO_SCHEDULE_LABEL
    assert result.minutes_until_change is None
    assert result.changes_at is None
    assert result.skipped_rows == 0


def test_malformed_rows_are_skipped() -> None:
    hours = [
        _row(9, "17:00", "23:00"),
        _row(WEDNESDAY, "25:00", "23:00"),
        _row(WEDNESDAY, "abc", "23:00"),
        _row(WEDNESDAY, None, None),
        _row(WEDNESDAY, "17:00", "23:00"),
    ]

    result = evaluate_status(hours, _at(14, 16, 45), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPENING_SOON
    assert result.skipped_rows == 4


def test_only_malformed_rows_fall_back_to_no_schedule() -> None:
    hours = [_row(WEDNESDAY, "later", "23:00"), _row(None, "17:00", "23:00")]

    result = evaluate_status(hours, _at(14, 16, 45), CHICAGO)

    assert result.status == RestaurantOpenStatus.CLOSED
    assert result.label == NO_SCHEDULE_LABEL
    assert result.skipped_rows == 2


def test_business_time_zone_decides_local_day_and_time() -> None:
    hours = [_row(FRIDAY, "17:00", "23:00")]
    now = datetime(2026, 10, 16, 21, 45, tzinfo=timezone.utc)

    in_chicago = evaluate_status(hours, now, CHICAGO)
    in_bratislava = evaluate_status(hours, now, "Europe/Bratislava")
    in_tokyo = evaluate_status(hours, now, "Asia/Tokyo")

    assert in_chicago.status == RestaurantOpenStatus.OPENING_SOON
    assert in_chicago.label == "Opens in 15m"
    assert in_bratislava.status == RestaurantOpenStatus.CLOSED
    assert in_tokyo.status == RestaurantOpenStatus.CLOSED


def test_minutes_left_account_for_daylight_saving_change() -> None:
    hours = [_row(SATURDAY, "20:00", "03:00")]

    result = evaluate_status(hours, _at(31, 23, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open until 3:00 AM"
    assert result.minutes_until_change == 300


def test_threshold_is_configurable() -> None:
    disabled = evaluate_status(WEDNESDAY_DINNER, _at(14, 16, 45), CHICAGO, soon_threshold_minutes=0)
    wide = evaluate_status(WEDNESDAY_DINNER, _at(14, 16, 0), CHICAGO, soon_threshold_minutes=90)

    assert disabled.status == RestaurantOpenStatus.CLOSED
    assert wide.status == RestaurantOpenStatus.OPENING_SOON
    assert wide.label == "Opens in 60m"


def test_repeated_evaluation_is_identical() -> None:
    hours = [_row(WEDNESDAY, "11:30", "14:30"), _row(FRIDAY, "22:00", "02:00")]
    now = _at(14, 14, 10)

    assert evaluate_status(hours, now, CHICAGO) == evaluate_status(hours, now, CHICAGO)


def test_unknown_time_zone_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        evaluate_status(WEDNESDAY_DINNER, _at(14, 12, 0), "Mars/Olympus_Mons")


def test_naive_now_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        evaluate_status(WEDNESDAY_DINNER, datetime(2026, 10, 14, 12, 0), CHICAGO)


@pytest.mark.parametrize("threshold", [-1, True, 1.5])
def test_invalid_threshold_is_rejected(threshold: object) -> None:
    with pytest.raises(InvalidArgumentError):
        evaluate_status(
            WEDNESDAY_DINNER,
            _at(14, 12, 0),
            CHICAGO,
            soon_threshold_minutes=threshold,
        )


def test_evaluate_many_groups_rows_by_restaurant() -> None:
    rows = [
        RestaurantHourRow(WEDNESDAY, "10:00", "20:00", restaurant_id=RestaurantId("rst_open")),
        RestaurantHourRow(WEDNESDAY, "21:00", "23:00", restaurant_id=RestaurantId("rst_closed")),
        RestaurantHourRow(WEDNESDAY, "00:00", "24:00"),
    ]

    results = evaluate_many(rows, _at(14, 12, 0), CHICAGO)

    assert set(results) == {RestaurantId("rst_open"), RestaurantId("rst_closed")}
    assert results[RestaurantId("rst_open")].status == RestaurantOpenStatus.OPEN
    assert results[RestaurantId("rst_closed")].status == RestaurantOpenStatus.CLOSED


def test_evaluate_many_validates_arguments_up_front() -> None:
    with pytest.raises(InvalidArgumentError):
        evaluate_many([], _at(14, 12, 0), "Not/AZone")


def test_close_more_than_a_day_away_names_the_weekday() -> None:
    # Monday through Saturday around the clock; 2026-10-12 is a Monday.
    hours = [_row(day, "00:00", "24:00") for day in range(1, 7)]

    result = evaluate_status(hours, _at(12, 10, 0), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open until Sun 12:00 AM"
    assert result.minutes_until_change == 5 * 1440 + 14 * 60


def test_close_just_under_a_day_away_keeps_bare_time() -> None:
    hours = [_row(FRIDAY, "02:30", "02:00")]

    result = evaluate_status(hours, _at(16, 2, 30), CHICAGO)

    assert result.status == RestaurantOpenStatus.OPEN
    assert result.label == "Open until 2:00 AM"
    assert result.minutes_until_change == 23 * 60 + 30
