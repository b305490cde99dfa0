from __future__ import annotations

from datetime import datetime

from tablewait.domain.common.errors import InvalidArgumentError


def is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def require_aware(value: object, name: str) -> datetime:
    if not isinstance(value, datetime):
        raise InvalidArgumentError(f"{name} must be a datetime")
    if not is_aware(value):
        raise InvalidArgumentError(f"{name} must be timezone-aware")
    return value
