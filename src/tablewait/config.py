from __future__ import annotations

import math
import os
from dataclasses import dataclass

from tablewait.domain.common.errors import InvalidArgumentError
from tablewait.domain.hours.status import resolve_time_zone

DEFAULT_BUSINESS_TZ = "America/Chicago"
DEFAULT_SOON_THRESHOLD_MINUTES = 30
DEFAULT_AVG_MINUTES_PER_PARTY = 10.0


class InvalidSettingsError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    business_time_zone: str = DEFAULT_BUSINESS_TZ
    soon_threshold_minutes: int = DEFAULT_SOON_THRESHOLD_MINUTES
    avg_minutes_per_party: float = DEFAULT_AVG_MINUTES_PER_PARTY
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        try:
            resolve_time_zone(self.business_time_zone)
        except InvalidArgumentError as exc:
            raise InvalidSettingsError(str(exc)) from exc
        if self.soon_threshold_minutes < 0:
            raise InvalidSettingsError("soon threshold must be >= 0 minutes")
        if not math.isfinite(self.avg_minutes_per_party) or self.avg_minutes_per_party < 0:
            raise InvalidSettingsError("average minutes per party must be a finite value >= 0")


def _business_time_zone() -> str:
    return os.getenv("TABLEWAIT_BUSINESS_TZ", DEFAULT_BUSINESS_TZ).strip()


def _soon_threshold_minutes() -> int:
    raw_value = os.getenv("TABLEWAIT_SOON_THRESHOLD_MINUTES", str(DEFAULT_SOON_THRESHOLD_MINUTES))
    try:
        return int(raw_value)
    except ValueError as exc:
        raise InvalidSettingsError(
            f"TABLEWAIT_SOON_THRESHOLD_MINUTES must be an integer, got {raw_value!r}"
        ) from exc


def _avg_minutes_per_party() -> float:
    raw_value = os.getenv("TABLEWAIT_AVG_MINUTES_PER_PARTY", str(DEFAULT_AVG_MINUTES_PER_PARTY))
    try:
        return float(raw_value)
    except ValueError as exc:
        raise InvalidSettingsError(
            f"TABLEWAIT_AVG_MINUTES_PER_PARTY must be a number, got {raw_value!r}"
        ) from exc


def load_settings() -> Settings:
    return Settings(
        business_time_zone=_business_time_zone(),
        soon_threshold_minutes=_soon_threshold_minutes(),
        avg_minutes_per_party=_avg_minutes_per_party(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
