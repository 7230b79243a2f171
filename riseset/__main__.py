"""Command line entry point: ``python -m riseset --lat ... --lon ...``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import Observer
from .moon import MoonTransitError, moon_phase, moonrise, moonset
from .settings import load_settings
from .sun import sun

LOGGER = logging.getLogger("riseset")


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _build_parser(default_tz: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riseset", description="Print sun (and moon) events for a location as JSON."
    )
    parser.add_argument("--lat", type=str, required=True, help="Latitude in degrees or DMS, e.g. 51°30'N")
    parser.add_argument("--lon", type=str, required=True, help="Longitude in degrees or DMS")
    parser.add_argument("--elev", type=float, default=0.0, help="Observer elevation in meters")
    parser.add_argument("--date", type=str, default=None, help="YYYY-MM-DD (civil date in --tz)")
    parser.add_argument("--tz", type=str, default=default_tz, help="IANA time zone of the results")
    parser.add_argument("--moon", action="store_true", help="Include moonrise, moonset and phase")
    parser.add_argument(
        "--depression", type=float, default=6.0, help="Dawn/dusk depression in degrees"
    )
    return parser


def _moon_events(observer: Observer, day: date, tz: ZoneInfo, errors: List[str]) -> Dict[str, Any]:
    events: Dict[str, Any] = {}
    for name, calculate in (("moonrise", moonrise), ("moonset", moonset)):
        try:
            events[name] = _isoformat(calculate(observer, day, tz))
        except MoonTransitError as exc:
            errors.append(str(exc))
            events[name] = None
    events["phase"] = moon_phase(day)
    return events


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(message)s")

    parser = _build_parser(settings.timezone)
    ns = parser.parse_args(argv)

    try:
        tz = ZoneInfo(ns.tz)
    except (ZoneInfoNotFoundError, ValueError):
        parser.error(f"unknown time zone: {ns.tz}")

    try:
        day = date.fromisoformat(ns.date) if ns.date else datetime.now(tz).date()
    except ValueError:
        parser.error(f"invalid date: {ns.date}")

    try:
        observer = Observer(latitude=ns.lat, longitude=ns.lon, elevation=ns.elev)
    except ValueError as exc:
        parser.error(str(exc))

    LOGGER.info(
        json.dumps(
            {
                "event": "cli_request",
                "latitude": observer.latitude,
                "longitude": observer.longitude,
                "date": day.isoformat(),
                "tz": ns.tz,
            }
        )
    )

    errors: List[str] = []
    events = sun(observer, day, ns.depression, tz)
    result: Dict[str, Any] = {
        "date": day.isoformat(),
        "timezone": ns.tz,
        "observer": {
            "latitude": observer.latitude,
            "longitude": observer.longitude,
            "elevation": ns.elev,
        },
        "sun": {name: _isoformat(value) for name, value in events.items()},
    }
    if ns.moon:
        result["moon"] = _moon_events(observer, day, tz, errors)
    if errors:
        result["errors"] = errors

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
