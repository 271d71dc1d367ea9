"""Polygons with holes and a precomputed bounding box."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from tz_locator.geometry.primitives import Point, Rect
from tz_locator.geometry.raycast import ring_contains_point

Ring = Tuple[Point, ...]


@dataclass(frozen=True)
class Polygon:
    exterior: Ring
    holes: Tuple[Ring, ...]
    rect: Rect

    @classmethod
    def new(cls, exterior: Sequence[Point], holes: Iterable[Sequence[Point]] = ()) -> "Polygon":
        """Build a polygon, bounding it by its exterior ring.

        Holes are stored as given; they are expected to lie inside the
        exterior but this is not checked.
        """
        ring = tuple(Point(*p) for p in exterior)
        if not ring:
            raise ValueError("polygon exterior must contain at least one point")
        return cls(
            exterior=ring,
            holes=tuple(tuple(Point(*p) for p in hole) for hole in holes),
            rect=Rect.from_points(ring),
        )

    def contains_point_normal(self, p: Point, allow_on_edge: bool = False) -> bool:
        """Exterior and hole tests without the bounding box reject."""
        if not ring_contains_point(self.exterior, p, allow_on_edge):
            return False
        for hole in self.holes:
            if ring_contains_point(hole, p, allow_on_edge):
                return False
        return True

    def contains_point(self, p: Point, allow_on_edge: bool = False) -> bool:
        if not self.rect.contains_point(p):
            return False
        return self.contains_point_normal(p, allow_on_edge)


__all__ = ["Polygon", "Ring"]
