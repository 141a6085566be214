"""Static world fixtures and the protocol every world object follows."""

from __future__ import annotations

from typing import Protocol

import pymunk

from voxel_episodes.config.constants import (
    ROBOT_COLLISION_GROUP,
    SURFACE_FRICTION,
    TERRAIN_SEGMENT_RADIUS,
)
from voxel_episodes.domain.geometry import Point2
from voxel_episodes.domain.snapshot import FixtureState, ObjectState
from voxel_episodes.domain.terrain import TerrainProfile


class WorldObject(Protocol):
    def add_to(self, space: pymunk.Space) -> None: ...

    def immutable(self) -> ObjectState: ...


class Ground:
    """Static polyline following a terrain profile."""

    def __init__(self, profile: TerrainProfile) -> None:
        self.profile = profile
        self.body = pymunk.Body(body_type=pymunk.Body.STATIC)
        self.shapes: list[pymunk.Segment] = []
        vertices = profile.vertices()
        for a, b in zip(vertices, vertices[1:]):
            segment = pymunk.Segment(self.body, a, b, TERRAIN_SEGMENT_RADIUS)
            segment.friction = SURFACE_FRICTION
            self.shapes.append(segment)

    def add_to(self, space: pymunk.Space) -> None:
        space.add(self.body, *self.shapes)

    def immutable(self) -> FixtureState:
        return FixtureState("ground", tuple(Point2(x, y) for x, y in self.profile.vertices()))


class Wall:
    """Static box anchoring a cantilever; it shares the robot's collision group."""

    def __init__(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0.0 or height <= 0.0:
            raise ValueError("wall width and height must be > 0")
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.body = pymunk.Body(body_type=pymunk.Body.STATIC)
        self.body.position = (x + width / 2.0, y + height / 2.0)
        self.shape = pymunk.Poly.create_box(self.body, (width, height))
        self.shape.friction = SURFACE_FRICTION
        self.shape.filter = pymunk.ShapeFilter(group=ROBOT_COLLISION_GROUP)

    def add_to(self, space: pymunk.Space) -> None:
        space.add(self.body, self.shape)

    def immutable(self) -> FixtureState:
        x0, y0 = self.x, self.y
        x1, y1 = x0 + self.width, y0 + self.height
        return FixtureState(
            "wall",
            (Point2(x0, y1), Point2(x1, y1), Point2(x1, y0), Point2(x0, y0)),
        )
