"""Parse preindex and polygon payloads into plain records.

A payload is either the serialized protobuf bytes, an already decoded message,
or a mapping with the same field names (handy for fixtures and JSON dumps).
Everything returned here is an immutable tuple of records; the finders derive
their indexes from these in a second step.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, NamedTuple, Tuple, Union

import numpy as np
from google.protobuf.message import Message

from tz_locator.data import schema
from tz_locator.errors import DataLoadError
from tz_locator.geometry.primitives import Point

LOGGER = logging.getLogger(__name__)

Payload = Union[bytes, bytearray, memoryview, Mapping, Message]


class TileKey(NamedTuple):
    z: int
    x: int
    y: int
    name: str


class PreindexRecords(NamedTuple):
    version: str
    idx_zoom: int
    agg_zoom: int
    keys: Tuple[TileKey, ...]


class RawPolygon(NamedTuple):
    exterior: Tuple[Point, ...]
    holes: Tuple[Tuple[Point, ...], ...]


class RawTimezone(NamedTuple):
    name: str
    polygons: Tuple[RawPolygon, ...]


class TimezoneRecords(NamedTuple):
    version: str
    reduced: bool
    timezones: Tuple[RawTimezone, ...]


def _field(obj: Any, *names: str, default: Any = None) -> Any:
    """Read the first present field out of a message or a mapping."""
    if isinstance(obj, Mapping):
        for name in names:
            if name in obj:
                return obj[name]
        if default is not None:
            return default
        raise KeyError(names[0])
    for name in names:
        if hasattr(obj, name):
            return getattr(obj, name)
    if default is not None:
        return default
    raise AttributeError(names[0])


def _decode(payload: Payload, message_cls: Any) -> Any:
    if payload is None:
        raise DataLoadError(f"missing {message_cls.DESCRIPTOR.name} payload")
    if isinstance(payload, (bytes, bytearray, memoryview)):
        if not payload:
            raise DataLoadError(f"empty {message_cls.DESCRIPTOR.name} payload")
        decoded = message_cls()
        try:
            decoded.ParseFromString(bytes(payload))
        except schema.DecodeError as exc:
            raise DataLoadError(f"cannot decode {message_cls.DESCRIPTOR.name} payload: {exc}") from exc
        return decoded
    if not isinstance(payload, (Mapping, message_cls)):
        raise DataLoadError(
            f"expected bytes, a mapping or a {message_cls.DESCRIPTOR.name} message, got {type(payload).__name__}"
        )
    return payload


def _version(decoded: Any) -> str:
    version = str(_field(decoded, "version"))
    if not version:
        raise DataLoadError("payload has no version")
    return version


def _ring(points: Any) -> Tuple[Point, ...]:
    coords = np.array(
        [(float(_field(p, "lng")), float(_field(p, "lat"))) for p in points],
        dtype=np.float64,
    ).reshape(-1, 2)
    if not np.isfinite(coords).all():
        raise DataLoadError("ring contains non-finite coordinates")
    return tuple(Point(x, y) for x, y in coords.tolist())


def parse_preindex(payload: Payload) -> PreindexRecords:
    """Decode a preindexed tile set into records."""
    decoded = _decode(payload, schema.PreindexTimezones)
    try:
        records = PreindexRecords(
            version=_version(decoded),
            idx_zoom=int(_field(decoded, "idxZoom", "idx_zoom")),
            agg_zoom=int(_field(decoded, "aggZoom", "agg_zoom")),
            keys=tuple(
                TileKey(
                    z=int(_field(key, "z")),
                    x=int(_field(key, "x")),
                    y=int(_field(key, "y")),
                    name=str(_field(key, "name")),
                )
                for key in _field(decoded, "keys", default=())
            ),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise DataLoadError(f"malformed preindex payload: {exc!r}") from exc

    if not records.keys:
        raise DataLoadError(f"preindex {records.version} has no tile keys")

    LOGGER.debug("Parsed preindex %s with %d tile keys", records.version, len(records.keys))
    return records


def parse_timezones(payload: Payload) -> TimezoneRecords:
    """Decode a timezone polygon set into records."""
    decoded = _decode(payload, schema.Timezones)
    try:
        timezones = []
        for tz in _field(decoded, "timezones", default=()):
            polygons = []
            for polygon in _field(tz, "polygons", default=()):
                exterior = _ring(_field(polygon, "points"))
                if not exterior:
                    raise DataLoadError(f"empty polygon exterior in {_field(tz, 'name')!r}")
                holes = tuple(_ring(_field(hole, "points")) for hole in _field(polygon, "holes", default=()))
                polygons.append(RawPolygon(exterior=exterior, holes=holes))
            timezones.append(RawTimezone(name=str(_field(tz, "name")), polygons=tuple(polygons)))
        records = TimezoneRecords(
            version=_version(decoded),
            reduced=bool(_field(decoded, "reduced", default=False)),
            timezones=tuple(timezones),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise DataLoadError(f"malformed timezone payload: {exc!r}") from exc

    if not records.timezones:
        raise DataLoadError(f"polygon set {records.version} has no timezones")

    LOGGER.debug("Parsed polygon set %s with %d timezones", records.version, len(records.timezones))
    return records


__all__ = [
    "PreindexRecords",
    "RawPolygon",
    "RawTimezone",
    "TileKey",
    "TimezoneRecords",
    "parse_preindex",
    "parse_timezones",
]
