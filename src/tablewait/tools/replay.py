from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from tablewait.application.dto.requests import RestaurantSnapshotRequest
from tablewait.application.mappers.snapshot_mapper import to_hour_rows, to_waitlist_entries
from tablewait.application.use_cases.get_restaurant_status import build_restaurant_status
from tablewait.application.use_cases.get_waitlist_queue import build_waitlist_queue
from tablewait.config import InvalidSettingsError, load_settings
from tablewait.domain.common.ids import RestaurantId
from tablewait.infrastructure.clock import OverridableClock
from tablewait.infrastructure.observability.logging_config import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay a restaurant snapshot through the queue and hours engines."
    )
    parser.add_argument("snapshot", help="Path to a JSON snapshot file.")
    parser.add_argument(
        "--at",
        default=None,
        help="Evaluate at this ISO-8601 instant (with offset) instead of the current time.",
    )
    parser.add_argument(
        "--tz",
        default=None,
        help="Business time zone; overrides the snapshot and TABLEWAIT_BUSINESS_TZ.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        settings = load_settings()
        configure_logging(settings.log_level)

        clock = OverridableClock()
        if args.at:
            clock.set_override(args.at)

        raw = Path(args.snapshot).read_text(encoding="utf-8")
        snapshot = RestaurantSnapshotRequest.model_validate_json(raw)
        time_zone = args.tz or snapshot.time_zone
        if time_zone:
            settings = replace(settings, business_time_zone=time_zone)

        now = clock.now()
        restaurant_id = RestaurantId(snapshot.restaurant_id)
        queue = build_waitlist_queue(
            restaurant_id=restaurant_id,
            entries=to_waitlist_entries(snapshot),
            now=now,
            settings=settings,
        )
        status = build_restaurant_status(
            restaurant_id=restaurant_id,
            rows=to_hour_rows(snapshot),
            now=now,
            settings=settings,
        )
    except (OSError, ValueError, InvalidSettingsError) as exc:
        print(f"replay failed: {exc}", file=sys.stderr)
        return 2

    output = {
        "queue": queue.model_dump(mode="json"),
        "status": status.model_dump(mode="json"),
    }
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
