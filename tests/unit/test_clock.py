from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from tablewait.infrastructure.clock import OverridableClock, SystemClock


class FixedClock(SystemClock):
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now


FALLBACK_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def test_system_clock_is_aware_utc() -> None:
    now = SystemClock().now()

    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


def test_overridable_clock_falls_back_without_override() -> None:
    clock = OverridableClock(fallback=FixedClock(FALLBACK_NOW))

    assert clock.override is None
    assert clock.now() == FALLBACK_NOW


def test_override_accepts_iso_string() -> None:
    clock = OverridableClock(fallback=FixedClock(FALLBACK_NOW))

    clock.set_override("2026-10-16T16:45:00-05:00")

    assert clock.now() == datetime(2026, 10, 16, 21, 45, tzinfo=timezone.utc)


def test_override_can_be_cleared() -> None:
    clock = OverridableClock(fallback=FixedClock(FALLBACK_NOW))
    clock.set_override(datetime(2026, 1, 1, tzinfo=timezone.utc))

    clock.set_override(None)

    assert clock.now() == FALLBACK_NOW


@pytest.mark.parametrize("value", ["2026-10-16T16:45:00", datetime(2026, 10, 16, 16, 45)])
def test_naive_override_is_rejected(value: object) -> None:
    clock = OverridableClock(fallback=FixedClock(FALLBACK_NOW))

    with pytest.raises(ValueError):
        clock.set_override(value)
