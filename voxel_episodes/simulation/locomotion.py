"""Locomotion over randomized hilly terrain."""

from __future__ import annotations

import logging
import time
from random import Random

from voxel_episodes.config.constants import GRAVITY
from voxel_episodes.config.types import LocomotionConfig, LocomotionResult, Settings
from voxel_episodes.domain.objects import Ground, WorldObject
from voxel_episodes.domain.placement import placement_translation
from voxel_episodes.domain.robot import Robot, RobotDescription, sinusoidal_controller
from voxel_episodes.domain.snapshot import SnapshotSink
from voxel_episodes.domain.terrain import generate_terrain
from voxel_episodes.domain.voxel import Sensor
from voxel_episodes.metrics.throughput import throughput
from voxel_episodes.simulation.episode import Episode
from voxel_episodes.simulation.world import assemble_world, step_world

logger = logging.getLogger(__name__)


class LocomotionEpisode(Episode[LocomotionResult]):
    """Drive a robot with its controller over terrain until ``final_t``.

    Descriptions without a controller get the travelling sine wave at
    ``config.frequency``. Control computed after a step acts on the next one.
    """

    def __init__(self, config: LocomotionConfig, settings: Settings | None = None) -> None:
        super().__init__(settings if settings is not None else Settings())
        self.config = config

    def apply(
        self, description: RobotDescription, sink: SnapshotSink | None = None
    ) -> LocomotionResult:
        config = self.config
        if description.controller is None:
            description = description.with_controller(
                sinusoidal_controller(
                    description.voxels.width, description.voxels.height, config.frequency
                )
            )
        robot = Robot(description)
        profile = generate_terrain(
            config.ground_hills_n,
            config.ground_length,
            config.ground_hills_height,
            Random(config.ground_seed),
        )
        ground = Ground(profile)
        shift = placement_translation(
            robot.bounding_box(), profile, config.placement_x_gap, config.placement_y_gap
        )
        robot.translate(shift.x, shift.y)
        objects: list[WorldObject] = [robot, ground]
        space = assemble_world(self.settings, objects, gravity=GRAVITY)

        voxels = [v for v in robot.voxels.values() if v is not None]
        n_voxels = len(voxels)
        max_velocity = float("-inf")
        broken_sum = 0.0
        steps = 0
        t = 0.0
        start = time.perf_counter()
        while t < config.final_t:
            steps += 1
            t = self._steps_elapsed(steps)
            step_world(space, self.settings)
            robot.act(t)
            self._notify(sink, t, objects)
            for voxel in voxels:
                max_velocity = max(max_velocity, voxel.sensor_reading(Sensor.VELOCITY_MAGNITUDE))
                broken_sum += voxel.sensor_reading(Sensor.BROKEN_RATIO)
        real_time = time.perf_counter() - start

        rates = throughput(n_voxels, steps, t, real_time)
        logger.debug("locomotion finished: %d steps in %.3fs", steps, real_time)
        return LocomotionResult(
            real_time=real_time,
            steps=steps,
            overall_voxel_steps_per_second=rates.voxel_steps_per_second,
            overall_voxel_sim_seconds_per_second=rates.voxel_sim_seconds_per_second,
            overall_steps_per_second=rates.steps_per_second,
            avg_broken_ratio=broken_sum / n_voxels / steps,
            max_velocity_magnitude=max_velocity,
        )
