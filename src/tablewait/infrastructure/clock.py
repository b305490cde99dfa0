from __future__ import annotations

from datetime import datetime, timezone

from tablewait.domain.common.timestamps import is_aware


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class OverridableClock:
    """Clock that can be pinned to a fixed instant, for admin previews and replays."""

    def __init__(self, fallback: SystemClock | None = None) -> None:
        self._fallback = fallback or SystemClock()
        self._override: datetime | None = None

    @property
    def override(self) -> datetime | None:
        return self._override

    def set_override(self, value: datetime | str | None) -> None:
        if value is None:
            self._override = None
            return
        moment = datetime.fromisoformat(value) if isinstance(value, str) else value
        if not is_aware(moment):
            raise ValueError("clock override must be timezone-aware")
        self._override = moment

    def now(self) -> datetime:
        if self._override is not None:
            return self._override
        return self._fallback.now()
