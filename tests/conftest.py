import os
from pathlib import Path

import pytest
from google.protobuf import json_format

from tz_locator.data import schema
from tz_locator.finders.default import DefaultFinder
from tz_locator.finders.polygon import PolygonFinder
from tz_locator.finders.preindex import PreindexFinder, lnglat_to_tile


def _ring(*coords):
    return [{"lng": float(x), "lat": float(y)} for x, y in coords]


def _box(x0, y0, x1, y1):
    return _ring((x0, y0), (x1, y0), (x1, y1), (x0, y1))


def _polygon_payload():
    """Small synthetic world.

    Outer [0,10]^2 has a hole [4,6]^2 that Inner fills, East shares Outer's
    x=10 border, Far starts just past East leaving a sliver, Island is two
    disjoint parts.
    """
    return {
        "version": "test-2025a",
        "reduced": True,
        "timezones": [
            {"name": "Test/Outer", "polygons": [{"points": _box(0, 0, 10, 10), "holes": [{"points": _box(4, 4, 6, 6)}]}]},
            {"name": "Test/Inner", "polygons": [{"points": _box(4, 4, 6, 6)}]},
            {"name": "Test/East", "polygons": [{"points": _box(10, 0, 20, 10)}]},
            {"name": "Test/Far", "polygons": [{"points": _box(20.015, 0, 30, 10)}]},
            {
                "name": "Test/Island",
                "polygons": [
                    {"points": _ring((30, 0), (40, 0), (35, 10))},
                    {"points": _box(50, 0, 60, 10)},
                ],
            },
        ],
    }


def _preindex_payload():
    x, y = lnglat_to_tile(10.0, 5.0, 6)
    fx, fy = lnglat_to_tile(-90.0, 45.0, 2)
    return {
        "version": "test-2025a-preindex",
        "aggZoom": 1,
        "idxZoom": 6,
        "keys": [
            {"z": 1, "x": 0, "y": 0, "name": "Test/NorthWest"},
            {"z": 2, "x": fx, "y": fy, "name": "Test/Finer"},
            {"z": 6, "x": x, "y": y, "name": "Test/Outer"},
            {"z": 6, "x": x, "y": y, "name": "Test/East"},
            {"z": 6, "x": x, "y": y, "name": "Test/East"},
        ],
    }


def _to_bytes(payload, message_cls):
    return json_format.ParseDict(payload, message_cls()).SerializeToString()


@pytest.fixture
def preindex_payload():
    return _preindex_payload()


@pytest.fixture
def polygon_payload():
    return _polygon_payload()


@pytest.fixture
def preindex_finder(preindex_payload):
    return PreindexFinder.from_payload(preindex_payload)


@pytest.fixture
def polygon_finder(polygon_payload):
    return PolygonFinder.from_payload(polygon_payload)


@pytest.fixture
def default_finder(preindex_payload, polygon_payload):
    return DefaultFinder.from_payloads(preindex_payload, polygon_payload)


@pytest.fixture
def payload_bytes(preindex_payload, polygon_payload):
    return (
        _to_bytes(preindex_payload, schema.PreindexTimezones),
        _to_bytes(polygon_payload, schema.Timezones),
    )


@pytest.fixture(scope="session")
def release_payloads():
    """Real tzf release files, when a data directory provides them."""
    data_dir = Path(os.getenv("TZ_LOCATOR_DATA_DIR", "var/data"))
    preindex = data_dir / "combined-with-oceans.reduce.preindex.bin"
    polygons = data_dir / "combined-with-oceans.reduce.bin"
    if not (preindex.is_file() and polygons.is_file()):
        pytest.skip(f"tzf release payloads not found in {data_dir}")
    return preindex.read_bytes(), polygons.read_bytes()
