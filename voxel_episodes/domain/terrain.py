"""Piecewise-linear terrain profiles for locomotion episodes.

A profile has ``n_hills + 2`` vertices. The two outer anchors sit at
``(0, L/10)`` and ``(L, L/10)`` and act as raised walls; the interior vertices
are spaced ``L / n_hills`` apart starting at ``x = 1`` and draw their heights
from the supplied random source.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random

from voxel_episodes.domain.geometry import GeometryError


@dataclass(frozen=True)
class TerrainProfile:
    """Ordered ground vertices with strictly increasing x."""

    xs: tuple[float, ...]
    ys: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.xs) != len(self.ys):
            raise GeometryError("xs and ys must have the same length")
        if len(self.xs) < 2:
            raise GeometryError("a terrain profile needs at least 2 vertices")
        if any(b <= a for a, b in zip(self.xs, self.xs[1:])):
            raise GeometryError("terrain xs must be strictly increasing")

    def __len__(self) -> int:
        return len(self.xs)

    def interpolate(self, segment: int, x: float) -> float:
        """Height at *x* on segment ``[segment, segment + 1]``, clamped to it."""
        if not 0 <= segment < len(self.xs) - 1:
            raise IndexError(f"segment {segment} out of range for {len(self.xs)} vertices")
        x0, x1 = self.xs[segment], self.xs[segment + 1]
        y0, y1 = self.ys[segment], self.ys[segment + 1]
        x = min(max(x, x0), x1)
        return y0 + (y1 - y0) * (x - x0) / (x1 - x0)

    def vertices(self) -> list[tuple[float, float]]:
        return list(zip(self.xs, self.ys))


def generate_terrain(n_hills: int, length: float, max_height: float, rng: Random) -> TerrainProfile:
    """Build a hilly profile; identical seeds yield identical profiles."""
    if n_hills < 1:
        raise ValueError("n_hills must be >= 1")
    if length < 0.0:
        raise ValueError("length must be >= 0")
    if max_height < 0.0:
        raise ValueError("max_height must be >= 0")
    xs = [0.0]
    ys = [length / 10.0]
    for i in range(1, n_hills + 1):
        xs.append(1.0 + length / n_hills * (i - 1))
        ys.append(rng.random() * max_height)
    xs.append(length)
    ys.append(length / 10.0)
    return TerrainProfile(tuple(xs), tuple(ys))
