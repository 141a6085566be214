"""Immutable 2-D geometry primitives shared across domain and simulation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class GeometryError(ValueError):
    """A geometric input is degenerate or missing."""


@dataclass(frozen=True)
class Point2:
    """A point (or displacement) in world coordinates."""

    x: float
    y: float

    def __add__(self, other: Point2) -> Point2:
        return Point2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point2) -> Point2:
        return Point2(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box spanned by ``min`` and ``max`` corners."""

    min: Point2
    max: Point2

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def is_degenerate(self) -> bool:
        """True when ``max`` lies below or left of ``min``."""
        return self.max.x < self.min.x or self.max.y < self.min.y

    @classmethod
    def of(cls, points: Iterable[Point2]) -> BoundingBox:
        """Smallest box enclosing *points*; raises GeometryError when empty."""
        pts = list(points)
        if not pts:
            raise GeometryError("cannot bound an empty point set")
        return cls(
            Point2(min(p.x for p in pts), min(p.y for p in pts)),
            Point2(max(p.x for p in pts), max(p.y for p in pts)),
        )
