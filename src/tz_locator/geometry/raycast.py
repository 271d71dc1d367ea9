"""Point-in-ring test by horizontal ray casting.

The ray leaves the query point towards +x. An edge toggles the even-odd flag
when the ray crosses it, and a point lying on any edge short-circuits the whole
ring with the caller's boundary policy.

Tolerance policy: degenerate, horizontal and vertical edges are detected with
exact float equality. General collinearity uses the cross product against
``EDGE_EPSILON``. Nothing else in the package compares coordinates with a
tolerance.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Sequence

from tz_locator.geometry.primitives import Point, Rect, Segment, next_up

# Absolute bound on |(b - a) x (p - a)| in degree^2 for "p lies on ab".
EDGE_EPSILON = 1e-12


class RaycastResult(NamedTuple):
    inside: bool  # ray crosses the edge (point is left of it)
    on: bool  # point lies on the edge


OUTSIDE = RaycastResult(inside=False, on=False)
CROSSING = RaycastResult(inside=True, on=False)
ON_EDGE = RaycastResult(inside=False, on=True)


def segment_at(ring: Sequence[Point], index: int) -> Segment:
    """Edge from ``ring[index]`` to the next point, wrapping last to first."""
    following = 0 if index == len(ring) - 1 else index + 1
    return Segment(ring[index], ring[following])


def _on_segment(a: Point, b: Point, p: Point) -> bool:
    if a.y == b.y:
        if a.x == b.x:
            return p.x == a.x and p.y == a.y
        if p.y == a.y:
            return min(a.x, b.x) <= p.x <= max(a.x, b.x)
        return False

    if a.x == b.x:
        return p.x == a.x and min(a.y, b.y) <= p.y <= max(a.y, b.y)

    if not (min(a.x, b.x) <= p.x <= max(a.x, b.x)):
        return False
    cross = (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)
    return abs(cross) <= EDGE_EPSILON


def raycast(seg: Segment, point: Point) -> RaycastResult:
    """Classify ``point`` against a single edge."""
    a, b = seg.a, seg.b
    if a.y > b.y:
        a, b = b, a

    px, py = point.x, point.y
    if py < a.y or py > b.y:
        return OUTSIDE

    if _on_segment(a, b, point):
        return ON_EDGE

    # Each edge spans [a.y, b.y), so a vertex shared by two edges is counted by
    # exactly one of them. The scanline is then nudged off a.y for the slope
    # comparison only.
    if not (a.y <= py < b.y):
        return OUTSIDE
    while py == a.y:
        py = next_up(py)

    if a.x > b.x:
        left, right = b.x, a.x
    else:
        left, right = a.x, b.x
    if px >= right:
        return OUTSIDE
    if px <= left:
        return CROSSING

    if (py - a.y) / (px - a.x) >= (b.y - a.y) / (b.x - a.x):
        return CROSSING
    return OUTSIDE


def ring_contains_point(ring: Sequence[Point], point: Point, allow_on_edge: bool = False) -> bool:
    """Even-odd containment of ``point`` in a closed ring.

    A point on any edge returns ``allow_on_edge`` immediately.
    """
    scanline = Rect(Point(-math.inf, point.y), Point(math.inf, point.y))

    inside = False
    for i in range(len(ring)):
        seg = segment_at(ring, i)
        if not seg.rect().intersects_rect(scanline):
            continue
        result = raycast(seg, point)
        if result.on:
            return allow_on_edge
        if result.inside:
            inside = not inside
    return inside


__all__ = [
    "EDGE_EPSILON",
    "RaycastResult",
    "raycast",
    "ring_contains_point",
    "segment_at",
]
