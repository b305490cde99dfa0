from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from tablewait.domain.common.ids import EntryId, RestaurantId
from tablewait.domain.common.timestamps import is_aware


class WaitlistStatus(str, Enum):
    WAITING = "waiting"
    NOTIFIED = "notified"
    SEATED = "seated"
    REMOVED = "removed"
    LEFT = "left"


_TERMINAL = frozenset({WaitlistStatus.SEATED, WaitlistStatus.REMOVED, WaitlistStatus.LEFT})


@dataclass(frozen=True)
class WaitlistEntry:
    entry_id: EntryId
    restaurant_id: RestaurantId
    party_size: int
    status: WaitlistStatus
    joined_at: datetime
    notified_at: datetime | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "status", WaitlistStatus(self.status))
        except ValueError as exc:
            raise ValueError(f"unknown waitlist status: {self.status!r}") from exc
        if isinstance(self.party_size, bool) or not isinstance(self.party_size, int):
            raise ValueError("party_size must be an integer")
        if self.party_size < 1:
            raise ValueError("party_size must be >= 1")
        if not is_aware(self.joined_at):
            raise ValueError("joined_at must be timezone-aware")
        if self.notified_at is not None and not is_aware(self.notified_at):
            raise ValueError("notified_at must be timezone-aware")
        if self.status == WaitlistStatus.NOTIFIED and self.notified_at is None:
            raise ValueError("notified_at must be set when status is notified")

    @property
    def is_queued(self) -> bool:
        return self.status == WaitlistStatus.WAITING

    def notify(self, now: datetime) -> WaitlistEntry:
        if self.status != WaitlistStatus.WAITING:
            raise WaitlistTransitionError(f"cannot notify entry from status={self.status.value}")
        return replace(self, status=WaitlistStatus.NOTIFIED, notified_at=now)

    def seat(self) -> WaitlistEntry:
        if self.status != WaitlistStatus.NOTIFIED:
            raise WaitlistTransitionError(f"cannot seat entry from status={self.status.value}")
        return replace(self, status=WaitlistStatus.SEATED)

    def remove(self) -> WaitlistEntry:
        return self._drop(WaitlistStatus.REMOVED)

    def leave(self) -> WaitlistEntry:
        return self._drop(WaitlistStatus.LEFT)

    def _drop(self, target: WaitlistStatus) -> WaitlistEntry:
        if self.status in _TERMINAL:
            raise WaitlistTransitionError(
                f"cannot move entry to {target.value} from status={self.status.value}"
            )
        return replace(self, status=target)


class WaitlistTransitionError(Exception):
    pass
