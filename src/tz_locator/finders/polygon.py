"""Exact strategy: scan every timezone polygon."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

from tz_locator.data.payloads import Payload, TimezoneRecords, parse_timezones
from tz_locator.errors import NoTimezoneFound
from tz_locator.geometry.polygon import Polygon
from tz_locator.geometry.primitives import Point

LOGGER = logging.getLogger(__name__)

# Simplified borders leave slivers between neighbouring zones; when nothing
# contains the point it is nudged by these offsets (degrees) on both axes.
SHIFT_OFFSETS: Tuple[float, ...] = (0.0, -0.01, 0.01, -0.02, 0.02)


@dataclass(frozen=True)
class TimezonePolygons:
    name: str
    polygons: Tuple[Polygon, ...]

    def contains_point(self, p: Point, allow_on_edge: bool = True) -> bool:
        return any(polygon.contains_point(p, allow_on_edge) for polygon in self.polygons)


@dataclass(frozen=True)
class PolygonSet:
    version: str
    reduced: bool
    timezones: Tuple[TimezonePolygons, ...]


def build_timezone_polygons(payload: Payload) -> PolygonSet:
    """Parse a polygon payload and precompute every polygon's bounding box."""
    records = payload if isinstance(payload, TimezoneRecords) else parse_timezones(payload)
    timezones = tuple(
        TimezonePolygons(
            name=tz.name,
            polygons=tuple(Polygon.new(raw.exterior, raw.holes) for raw in tz.polygons),
        )
        for tz in records.timezones
    )
    return PolygonSet(version=records.version, reduced=records.reduced, timezones=timezones)


class PolygonFinder:
    """Point-in-polygon lookups over the full polygon set."""

    def __init__(self, polygons: PolygonSet, *, allow_on_edge: bool = True) -> None:
        self._polygons = polygons
        self._allow_on_edge = allow_on_edge

    @classmethod
    def from_payload(cls, payload: Payload, *, allow_on_edge: bool = True) -> "PolygonFinder":
        polygons = build_timezone_polygons(payload)
        LOGGER.info(
            "Loaded polygon set %s: %d timezones, %d polygons",
            polygons.version,
            len(polygons.timezones),
            sum(len(tz.polygons) for tz in polygons.timezones),
        )
        return cls(polygons, allow_on_edge=allow_on_edge)

    @property
    def reduced(self) -> bool:
        return self._polygons.reduced

    def data_version(self) -> str:
        return self._polygons.version

    def timezone_names(self) -> List[str]:
        return [tz.name for tz in self._polygons.timezones]

    def _matches(self, p: Point) -> Iterable[str]:
        for tz in self._polygons.timezones:
            if tz.contains_point(p, self._allow_on_edge):
                yield tz.name

    def get_timezones(self, lng: float, lat: float) -> List[str]:
        found: Set[str] = set(self._matches(Point(lng, lat)))
        if not found:
            LOGGER.debug("No polygon contains (%s, %s); probing nearby points", lng, lat)
            for dx in SHIFT_OFFSETS:
                for dy in SHIFT_OFFSETS:
                    found.update(self._matches(Point(lng + dx, lat + dy)))

        if not found:
            raise NoTimezoneFound(lng, lat)
        return sorted(found)

    def get_timezone(self, lng: float, lat: float) -> str:
        return self.get_timezones(lng, lat)[0]


__all__ = ["SHIFT_OFFSETS", "PolygonFinder", "PolygonSet", "TimezonePolygons", "build_timezone_polygons"]
