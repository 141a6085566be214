"""Immutable world-state records delivered to snapshot sinks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from voxel_episodes.domain.geometry import Point2


@dataclass(frozen=True)
class VoxelState:
    """Outer polygon (TL, TR, BR, BL) and sensor readings of one voxel."""

    vertices: tuple[Point2, ...]
    center: Point2
    area_ratio: float
    control: float


@dataclass(frozen=True)
class RobotState:
    """Row-major voxel states; ``None`` marks an empty grid slot."""

    width: int
    height: int
    voxels: tuple[VoxelState | None, ...]


@dataclass(frozen=True)
class FixtureState:
    """Static fixture outline, e.g. a ground polyline or a wall rectangle."""

    kind: str
    vertices: tuple[Point2, ...]


ObjectState = RobotState | FixtureState


@dataclass(frozen=True)
class Snapshot:
    """Frozen view of every world object at simulated time ``t``."""

    t: float
    objects: tuple[ObjectState, ...]


SnapshotSink = Callable[[Snapshot], None]
