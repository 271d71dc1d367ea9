"""Tile preindex strategy.

Each tile key ``(z, x, y)`` maps to the timezone names that intersect it. A
lookup walks from the coarse aggregate zoom to the finest index zoom and stops
at the first tile that exists, so interior points resolve in one dictionary
lookup and only points near borders pay for the finer levels.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

from tz_locator.data.payloads import Payload, PreindexRecords, parse_preindex
from tz_locator.errors import DataLoadError, InvalidCoordinate, NoTimezoneFound

LOGGER = logging.getLogger(__name__)

TileCoord = Tuple[int, int, int]


@dataclass(frozen=True)
class TileIndex:
    version: str
    agg_zoom: int
    idx_zoom: int
    tiles: Mapping[TileCoord, Tuple[str, ...]]

    def names_at(self, z: int, x: int, y: int) -> Tuple[str, ...]:
        return self.tiles.get((z, x, y), ())


def build_tile_index(payload: Payload) -> TileIndex:
    """Parse a preindex payload and derive its read-only tile index."""
    records = payload if isinstance(payload, PreindexRecords) else parse_preindex(payload)
    if records.agg_zoom < 0 or records.idx_zoom < 0:
        raise DataLoadError(f"negative zoom bounds: agg={records.agg_zoom}, idx={records.idx_zoom}")
    if records.agg_zoom > records.idx_zoom:
        raise DataLoadError(f"aggZoom {records.agg_zoom} is finer than idxZoom {records.idx_zoom}")

    grouped: defaultdict[TileCoord, set] = defaultdict(set)
    for key in records.keys:
        grouped[(key.z, key.x, key.y)].add(key.name)

    tiles = {coord: tuple(sorted(names)) for coord, names in grouped.items()}
    return TileIndex(
        version=records.version,
        agg_zoom=records.agg_zoom,
        idx_zoom=records.idx_zoom,
        tiles=MappingProxyType(tiles),
    )


def lnglat_to_tile(lng: float, lat: float, zoom: int) -> Tuple[int, int]:
    """Project to spherical-Mercator tile coordinates, clamped to the grid."""
    n = 2 ** zoom
    last = n - 1

    x = math.floor((lng + 180.0) / 360.0 * n)

    lat_rad = math.radians(lat)
    if lat >= 90.0:
        y = 0
    elif lat <= -90.0:
        y = last
    else:
        y = math.floor((1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n)

    return max(0, min(x, last)), max(0, min(y, last))


def _check_coordinate(lng: float, lat: float) -> None:
    if not (-180.0 <= lng <= 180.0 and -90.0 <= lat <= 90.0):
        raise InvalidCoordinate(lng, lat)


class PreindexFinder:
    """Answers lookups from precomputed tiles only."""

    def __init__(self, index: TileIndex) -> None:
        self._index = index

    @classmethod
    def from_payload(cls, payload: Payload) -> "PreindexFinder":
        index = build_tile_index(payload)
        LOGGER.info(
            "Loaded tile preindex %s: %d tiles, zoom %d..%d",
            index.version,
            len(index.tiles),
            index.agg_zoom,
            index.idx_zoom,
        )
        return cls(index)

    @property
    def index(self) -> TileIndex:
        return self._index

    def data_version(self) -> str:
        return self._index.version

    def get_timezones(self, lng: float, lat: float) -> List[str]:
        _check_coordinate(lng, lat)

        index = self._index
        for zoom in range(index.agg_zoom, index.idx_zoom + 1):
            x, y = lnglat_to_tile(lng, lat, zoom)
            names = index.names_at(zoom, x, y)
            if names:
                return list(names)

        raise NoTimezoneFound(lng, lat)

    def get_timezone(self, lng: float, lat: float) -> str:
        return self.get_timezones(lng, lat)[0]


__all__ = ["PreindexFinder", "TileIndex", "build_tile_index", "lnglat_to_tile"]
