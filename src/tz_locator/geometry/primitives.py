"""Planar geometry values on raw (lng, lat) degrees."""

from __future__ import annotations

import math
from typing import Iterable, NamedTuple


class Point(NamedTuple):
    x: float  # longitude
    y: float  # latitude


class Rect(NamedTuple):
    min: Point
    max: Point

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Rect":
        iterator = iter(points)
        try:
            first = next(iterator)
        except StopIteration:
            raise ValueError("cannot bound an empty point sequence") from None

        min_x = max_x = first.x
        min_y = max_y = first.y
        for p in iterator:
            if p.x < min_x:
                min_x = p.x
            elif p.x > max_x:
                max_x = p.x
            if p.y < min_y:
                min_y = p.y
            elif p.y > max_y:
                max_y = p.y
        return cls(Point(min_x, min_y), Point(max_x, max_y))

    def contains_point(self, p: Point) -> bool:
        return self.min.x <= p.x <= self.max.x and self.min.y <= p.y <= self.max.y

    def intersects_rect(self, other: "Rect") -> bool:
        if self.min.y > other.max.y or self.max.y < other.min.y:
            return False
        if self.min.x > other.max.x or self.max.x < other.min.x:
            return False
        return True

    # Corners
    def nw(self) -> Point:
        return Point(self.min.x, self.max.y)

    def sw(self) -> Point:
        return Point(self.min.x, self.min.y)

    def se(self) -> Point:
        return Point(self.max.x, self.min.y)

    def ne(self) -> Point:
        return Point(self.max.x, self.max.y)

    # Edges, counter-clockwise starting at the bottom
    def south(self) -> "Segment":
        return Segment(self.sw(), self.se())

    def east(self) -> "Segment":
        return Segment(self.se(), self.ne())

    def north(self) -> "Segment":
        return Segment(self.ne(), self.nw())

    def west(self) -> "Segment":
        return Segment(self.nw(), self.sw())

    def segment_at(self, index: int) -> "Segment":
        """Return edge ``index``: 0 south, 1 east, 2 north, 3 west."""
        edges = (self.south, self.east, self.north, self.west)
        if not 0 <= index < len(edges):
            raise IndexError(f"rectangle has 4 edges, got index {index}")
        return edges[index]()


class Segment(NamedTuple):
    a: Point
    b: Point

    def rect(self) -> Rect:
        a, b = self.a, self.b
        return Rect(
            Point(min(a.x, b.x), min(a.y, b.y)),
            Point(max(a.x, b.x), max(a.y, b.y)),
        )


def next_up(value: float) -> float:
    """Smallest-increment perturbation: the next float above ``value``.

    Used by the ray caster to move a scanline off a vertex latitude. Each call
    moves by exactly one ulp, so a loop of calls terminates as soon as the value
    differs from a finite target.
    """
    return math.nextafter(value, math.inf)


__all__ = ["Point", "Rect", "Segment", "next_up"]
