"""Assembly of a per-episode pymunk space."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import pymunk

from voxel_episodes.config.constants import GRAVITY
from voxel_episodes.config.types import Settings
from voxel_episodes.domain.geometry import Point2
from voxel_episodes.domain.objects import WorldObject
from voxel_episodes.domain.voxel import weld

logger = logging.getLogger(__name__)

Weld = tuple[pymunk.Body, pymunk.Body]


def assemble_world(
    settings: Settings,
    objects: Sequence[WorldObject],
    gravity: tuple[float, float] = GRAVITY,
    welds: Iterable[Weld] = (),
) -> pymunk.Space:
    """Create a space holding *objects*, with each weld pinned at its second body's position."""
    space = pymunk.Space()
    space.iterations = settings.solver_iterations
    space.gravity = gravity
    for obj in objects:
        obj.add_to(space)
    n_welds = 0
    for fixture_body, anchor_body in welds:
        position = anchor_body.position
        space.add(*weld(fixture_body, anchor_body, Point2(position.x, position.y)))
        n_welds += 1
    logger.debug(
        "assembled world: %d objects, %d welds, gravity=%s", len(objects), n_welds, gravity
    )
    return space


def step_world(space: pymunk.Space, settings: Settings) -> None:
    space.step(settings.step_interval)
