"""Soft voxel built from four corner point masses joined by spring-dampers.

Each corner is a small square pymunk body of side
``side_length * mass_side_length_ratio`` sitting inside the voxel's corner.
Spring groups are chosen through :class:`SpringScaffolding`; actuation scales
every spring's rest length by ``1 - control * max_length_ratio`` so that a
positive control contracts the voxel.
"""

from __future__ import annotations

import math
from enum import Enum, IntEnum

import pymunk

from voxel_episodes.config.constants import (
    BROKEN_SPRING_TOLERANCE,
    ROBOT_COLLISION_GROUP,
    SURFACE_FRICTION,
)
from voxel_episodes.config.types import SpringScaffolding, VoxelMaterial
from voxel_episodes.domain.geometry import Point2
from voxel_episodes.domain.snapshot import VoxelState

# Slide joints only bound contraction; this factor keeps their upper limit out of reach.
_SLIDE_MAX_FACTOR = 10.0


class Vertex(IntEnum):
    """Corner index of a voxel's vertex bodies."""

    TL = 0
    TR = 1
    BR = 2
    BL = 3


_CORNER_SIGNS: dict[Vertex, tuple[float, float]] = {
    Vertex.TL: (-1.0, 1.0),
    Vertex.TR: (1.0, 1.0),
    Vertex.BR: (1.0, -1.0),
    Vertex.BL: (-1.0, -1.0),
}

_SIDES: tuple[tuple[Vertex, Vertex], ...] = (
    (Vertex.TL, Vertex.TR),
    (Vertex.TR, Vertex.BR),
    (Vertex.BR, Vertex.BL),
    (Vertex.BL, Vertex.TL),
)


class Sensor(Enum):
    VELOCITY_MAGNITUDE = "velocity_magnitude"
    AREA_RATIO = "area_ratio"
    BROKEN_RATIO = "broken_ratio"


def _damped_velocity(linear: float, angular: float):
    """Velocity integrator adding per-body damping ``v / (1 + dt * d)``."""

    def update(body: pymunk.Body, gravity, damping: float, dt: float) -> None:
        pymunk.Body.update_velocity(body, gravity, damping, dt)
        body.velocity = body.velocity / (1.0 + dt * linear)
        body.angular_velocity = body.angular_velocity / (1.0 + dt * angular)

    return update


def weld(a: pymunk.Body, b: pymunk.Body, at: Point2) -> tuple[pymunk.Constraint, pymunk.Constraint]:
    """Rigidly join two bodies at world point *at* (pivot plus zero-ratio gear)."""
    pivot = pymunk.PivotJoint(a, b, at.as_tuple())
    pivot.collide_bodies = False
    gear = pymunk.GearJoint(a, b, 0.0, 1.0)
    return pivot, gear


class Voxel:
    """Runtime voxel owning its vertex bodies, shapes, springs and limits."""

    def __init__(self, material: VoxelMaterial, center: Point2) -> None:
        self.material = material
        self._control = 0.0
        s = material.side_length
        mass_side = s * material.mass_side_length_ratio
        self._half_mass_side = mass_side / 2.0
        vertex_mass = material.mass / 4.0
        offset = s / 2.0 - self._half_mass_side

        shape_filter = (
            pymunk.ShapeFilter()
            if material.mass_collision_flag
            else pymunk.ShapeFilter(group=ROBOT_COLLISION_GROUP)
        )
        bodies: list[pymunk.Body] = []
        self.shapes: list[pymunk.Shape] = []
        for vertex in Vertex:
            sx, sy = _CORNER_SIGNS[vertex]
            body = pymunk.Body(vertex_mass, pymunk.moment_for_box(vertex_mass, (mass_side, mass_side)))
            body.position = (center.x + sx * offset, center.y + sy * offset)
            body.velocity_func = _damped_velocity(
                material.mass_linear_damping, material.mass_angular_damping
            )
            shape = pymunk.Poly.create_box(body, (mass_side, mass_side))
            shape.friction = SURFACE_FRICTION
            shape.filter = shape_filter
            bodies.append(body)
            self.shapes.append(shape)
        self.vertex_bodies: tuple[pymunk.Body, ...] = tuple(bodies)

        omega = 2.0 * math.pi * material.spring_f
        stiffness = vertex_mass * omega**2
        damping = 2.0 * vertex_mass * omega * material.spring_d
        self.springs: list[pymunk.DampedSpring] = []
        self._rest_lengths: list[float] = []
        for a, b, anchor_a, anchor_b in self._spring_layout(material.spring_scaffoldings):
            body_a, body_b = self.vertex_bodies[a], self.vertex_bodies[b]
            rest = (body_a.local_to_world(anchor_a) - body_b.local_to_world(anchor_b)).length
            self.springs.append(
                pymunk.DampedSpring(body_a, body_b, anchor_a, anchor_b, rest, stiffness, damping)
            )
            self._rest_lengths.append(rest)

        self.limits: list[pymunk.SlideJoint] = []
        if material.limit_contraction_flag:
            for a, b in _SIDES:
                body_a, body_b = self.vertex_bodies[a], self.vertex_bodies[b]
                d0 = (body_a.position - body_b.position).length
                self.limits.append(
                    pymunk.SlideJoint(
                        body_a,
                        body_b,
                        (0.0, 0.0),
                        (0.0, 0.0),
                        d0 * (1.0 - material.max_length_ratio),
                        d0 * _SLIDE_MAX_FACTOR,
                    )
                )

    def _outer(self, vertex: Vertex) -> tuple[float, float]:
        sx, sy = _CORNER_SIGNS[vertex]
        return (sx * self._half_mass_side, sy * self._half_mass_side)

    def _inner(self, vertex: Vertex) -> tuple[float, float]:
        sx, sy = _CORNER_SIGNS[vertex]
        return (-sx * self._half_mass_side, -sy * self._half_mass_side)

    def _spring_layout(self, scaffoldings: frozenset[SpringScaffolding]):
        """Yield ``(vertex_a, vertex_b, local_anchor_a, local_anchor_b)`` per spring."""
        centre = (0.0, 0.0)
        for a, b in _SIDES:
            if SpringScaffolding.SIDE_EXTERNAL in scaffoldings:
                yield a, b, self._outer(a), self._outer(b)
            if SpringScaffolding.SIDE_INTERNAL in scaffoldings:
                yield a, b, self._inner(a), self._inner(b)
            if SpringScaffolding.SIDE_CROSS in scaffoldings:
                yield a, b, self._outer(a), self._inner(b)
                yield a, b, self._inner(a), self._outer(b)
        if SpringScaffolding.CENTRAL_CROSS in scaffoldings:
            yield Vertex.TL, Vertex.BR, centre, centre
            yield Vertex.TR, Vertex.BL, centre, centre

    def add_to(self, space: pymunk.Space) -> None:
        space.add(*self.vertex_bodies, *self.shapes, *self.springs, *self.limits)

    def translate(self, dx: float, dy: float) -> None:
        for body in self.vertex_bodies:
            body.position = body.position + (dx, dy)

    def body(self, vertex: Vertex) -> pymunk.Body:
        return self.vertex_bodies[vertex]

    def center(self) -> Point2:
        xs = [b.position.x for b in self.vertex_bodies]
        ys = [b.position.y for b in self.vertex_bodies]
        return Point2(sum(xs) / 4.0, sum(ys) / 4.0)

    def vertices(self) -> tuple[Point2, ...]:
        """Outer polygon corners in TL, TR, BR, BL order."""
        points = []
        for vertex in Vertex:
            corner = self.vertex_bodies[vertex].local_to_world(self._outer(vertex))
            points.append(Point2(corner.x, corner.y))
        return tuple(points)

    def area(self) -> float:
        pts = self.vertices()
        twice = sum(
            p.x * q.y - q.x * p.y for p, q in zip(pts, pts[1:] + pts[:1])
        )
        return abs(twice) / 2.0

    def apply_control(self, value: float) -> None:
        """Set actuation in ``[-1, 1]``; out-of-range values are clamped."""
        control = min(1.0, max(-1.0, value))
        self._control = control
        factor = 1.0 - control * self.material.max_length_ratio
        for spring, rest in zip(self.springs, self._rest_lengths):
            spring.rest_length = rest * factor

    @property
    def control(self) -> float:
        return self._control

    def _broken_ratio(self) -> float:
        if not self.springs:
            return 0.0
        broken = 0
        for spring, rest in zip(self.springs, self._rest_lengths):
            start = spring.a.local_to_world(spring.anchor_a)
            length = (start - spring.b.local_to_world(spring.anchor_b)).length
            if abs(length - rest) / rest > BROKEN_SPRING_TOLERANCE:
                broken += 1
        return broken / len(self.springs)

    def sensor_reading(self, sensor: Sensor) -> float:
        if sensor is Sensor.VELOCITY_MAGNITUDE:
            vx = sum(b.velocity.x for b in self.vertex_bodies) / 4.0
            vy = sum(b.velocity.y for b in self.vertex_bodies) / 4.0
            return math.hypot(vx, vy)
        if sensor is Sensor.AREA_RATIO:
            return self.area() / self.material.side_length**2
        if sensor is Sensor.BROKEN_RATIO:
            return self._broken_ratio()
        raise ValueError(f"unsupported sensor {sensor!r}")

    def immutable(self) -> VoxelState:
        return VoxelState(
            vertices=self.vertices(),
            center=self.center(),
            area_ratio=self.sensor_reading(Sensor.AREA_RATIO),
            control=self._control,
        )
