"""Robot descriptions and their runtime pymunk counterpart."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import pymunk

from voxel_episodes.config.types import VoxelMaterial
from voxel_episodes.domain.geometry import BoundingBox, GeometryError, Point2
from voxel_episodes.domain.grid import Grid, GridEntry
from voxel_episodes.domain.snapshot import RobotState
from voxel_episodes.domain.voxel import Vertex, Voxel, weld

ControlFunction = Callable[[float], float]


@dataclass(frozen=True)
class RobotDescription:
    """Voxel layout plus optional per-voxel actuation functions."""

    voxels: Grid[VoxelMaterial | None]
    controller: Grid[ControlFunction | None] | None = None

    def __post_init__(self) -> None:
        if self.voxels.count(lambda v: v is not None) == 0:
            raise GeometryError("a robot needs at least one voxel")
        if self.controller is not None and (
            self.controller.width != self.voxels.width
            or self.controller.height != self.voxels.height
        ):
            raise ValueError("controller grid must match the voxel grid size")

    @classmethod
    def filled(cls, width: int, height: int, material: VoxelMaterial) -> RobotDescription:
        """Full rectangular robot made of identical voxels."""
        return cls(Grid.create(width, height, material))

    def with_controller(self, controller: Grid[ControlFunction | None]) -> RobotDescription:
        return RobotDescription(self.voxels, controller)


def sinusoidal_controller(width: int, height: int, frequency: float) -> Grid[ControlFunction | None]:
    """Travelling wave ``sin(-2*pi*t*f + 2*pi*x/W)``, phase shifted by column."""

    def for_column(x: int, _y: int) -> ControlFunction:
        phase = 2.0 * math.pi * x / width
        return lambda t: math.sin(-2.0 * math.pi * t * frequency + phase)

    return Grid.from_function(width, height, for_column)


class Robot:
    """Grid of runtime voxels welded to their neighbours.

    Voxel ``(x, y)`` is centred at ``(x * s, -y * s)`` so that row 0 is the
    top row.
    """

    def __init__(self, description: RobotDescription) -> None:
        self.description = description

        def build(x: int, y: int) -> Voxel | None:
            material = description.voxels.get(x, y)
            if material is None:
                return None
            s = material.side_length
            return Voxel(material, Point2(x * s, -y * s))

        self.voxels: Grid[Voxel | None] = Grid.from_function(
            description.voxels.width, description.voxels.height, build
        )
        self.joints: list[pymunk.Constraint] = []
        self._weld_neighbours()

    def _weld_neighbours(self) -> None:
        for entry in self.voxels:
            voxel = entry.value
            if voxel is None:
                continue
            if entry.x + 1 < self.voxels.width:
                right = self.voxels.get(entry.x + 1, entry.y)
                if right is not None:
                    self._weld_pair(voxel, Vertex.TR, right, Vertex.TL)
                    self._weld_pair(voxel, Vertex.BR, right, Vertex.BL)
            if entry.y + 1 < self.voxels.height:
                below = self.voxels.get(entry.x, entry.y + 1)
                if below is not None:
                    self._weld_pair(voxel, Vertex.BL, below, Vertex.TL)
                    self._weld_pair(voxel, Vertex.BR, below, Vertex.TR)

    def _weld_pair(self, a: Voxel, va: Vertex, b: Voxel, vb: Vertex) -> None:
        pa, pb = a.body(va).position, b.body(vb).position
        self.joints.extend(weld(a.body(va), b.body(vb), Point2((pa.x + pb.x) / 2, (pa.y + pb.y) / 2)))

    def __iter__(self) -> Iterator[GridEntry[Voxel | None]]:
        return iter(self.voxels)

    @property
    def width(self) -> int:
        return self.voxels.width

    @property
    def height(self) -> int:
        return self.voxels.height

    def count(self, predicate: Callable[[Voxel | None], bool]) -> int:
        return self.voxels.count(predicate)

    @property
    def n_voxels(self) -> int:
        return self.voxels.count(lambda v: v is not None)

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.of(
            p for v in self.voxels.values() if v is not None for p in v.vertices()
        )

    def translate(self, dx: float, dy: float) -> None:
        for voxel in self.voxels.values():
            if voxel is not None:
                voxel.translate(dx, dy)

    def act(self, t: float) -> None:
        """Apply every voxel's control function at simulated time *t*."""
        controller = self.description.controller
        if controller is None:
            return
        for entry in self.voxels:
            fn = controller.get(entry.x, entry.y)
            if entry.value is not None and fn is not None:
                entry.value.apply_control(fn(t))

    def add_to(self, space: pymunk.Space) -> None:
        for voxel in self.voxels.values():
            if voxel is not None:
                voxel.add_to(space)
        space.add(*self.joints)

    def immutable(self) -> RobotState:
        return RobotState(
            width=self.voxels.width,
            height=self.voxels.height,
            voxels=tuple(None if v is None else v.immutable() for v in self.voxels.values()),
        )
