"""Command line entry point: resolve a coordinate to its timezone."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from tz_locator.config import Settings
from tz_locator.data.release_client import ReleaseClient
from tz_locator.errors import DataLoadError, TimezoneLookupError
from tz_locator.finders.base import Finder
from tz_locator.finders.default import DefaultFinder
from tz_locator.finders.polygon import PolygonFinder
from tz_locator.finders.preindex import PreindexFinder

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_finder(settings: Settings, client: Optional[ReleaseClient] = None) -> Finder:
    """Construct the finder selected by ``settings.strategy``."""
    client = client or ReleaseClient(settings)
    if settings.strategy == "preindex":
        return PreindexFinder.from_payload(client.preindex_bytes())
    if settings.strategy == "polygon":
        return PolygonFinder.from_payload(client.polygon_bytes(), allow_on_edge=settings.allow_on_edge)
    return DefaultFinder.from_payloads(
        client.preindex_bytes(),
        client.polygon_bytes(),
        allow_on_edge=settings.allow_on_edge,
        fallback_on_invalid=settings.fallback_on_invalid,
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Look up the IANA timezone of a coordinate")
    parser.add_argument("lng", type=float, help="Longitude in degrees, -180..180")
    parser.add_argument("lat", type=float, help="Latitude in degrees, -90..90")
    parser.add_argument("--all", action="store_true", help="Print every matching timezone")
    parser.add_argument("--version", action="store_true", help="Print the dataset version first")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings.load()
    configure_logging(settings.log_level)

    try:
        finder = build_finder(settings)
    except DataLoadError as exc:
        logger.error("Unable to load timezone data: %s", exc)
        return 2

    if args.version:
        print(finder.data_version())

    try:
        if args.all:
            for name in finder.get_timezones(args.lng, args.lat):
                print(name)
        else:
            print(finder.get_timezone(args.lng, args.lat))
    except TimezoneLookupError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
