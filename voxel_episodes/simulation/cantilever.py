"""Cantilever bending: a robot clamped to a wall is loaded at its free end."""

from __future__ import annotations

import logging
import time

from voxel_episodes.config.constants import WALL_WIDTH
from voxel_episodes.config.types import CantileverConfig, CantileverResult, Settings
from voxel_episodes.domain.geometry import GeometryError, Point2
from voxel_episodes.domain.objects import Wall, WorldObject
from voxel_episodes.domain.robot import Robot, RobotDescription
from voxel_episodes.domain.snapshot import SnapshotSink
from voxel_episodes.domain.voxel import Vertex
from voxel_episodes.io.schemas import TIME_EVOLUTION_KEYS
from voxel_episodes.metrics.damping import damping_index
from voxel_episodes.metrics.throughput import throughput
from voxel_episodes.simulation.episode import Episode
from voxel_episodes.simulation.world import assemble_world, step_world

logger = logging.getLogger(__name__)


class CantileverEpisode(Episode[CantileverResult]):
    """Measure how a horizontally clamped robot bends and settles.

    The leftmost voxel of every row is welded to a wall by its TL and BL
    vertices. While ``t <= force_duration`` the TR and BR vertices of every
    row's rightmost voxel share ``force`` equally. Gravity
    is off; actuation is never applied.
    """

    def __init__(self, config: CantileverConfig, settings: Settings | None = None) -> None:
        super().__init__(settings if settings is not None else Settings())
        self.config = config

    def apply(
        self, description: RobotDescription, sink: SnapshotSink | None = None
    ) -> CantileverResult:
        config = self.config
        robot = Robot(RobotDescription(description.voxels))
        width, height = robot.width, robot.height

        reference = robot.voxels.get(width - 1, height // 2)
        if reference is None:
            raise GeometryError(f"reference voxel ({width - 1}, {height // 2}) is empty")

        bbox = robot.bounding_box()
        wall = Wall(0.0, 0.0, WALL_WIDTH, bbox.height + 2.0 * config.wall_margin)
        robot.translate(WALL_WIDTH - bbox.min.x, config.wall_margin - bbox.min.y)

        welds = []
        for y in range(height):
            anchor = robot.voxels.get(0, y)
            if anchor is None:
                continue
            welds.append((wall.body, anchor.body(Vertex.TL)))
            welds.append((wall.body, anchor.body(Vertex.BL)))
        objects: list[WorldObject] = [robot, wall]
        space = assemble_world(self.settings, objects, gravity=(0.0, 0.0), welds=welds)

        loaded = []
        for y in range(height):
            tip = robot.voxels.get(width - 1, y)
            if tip is not None:
                loaded.extend((tip.body(Vertex.TR), tip.body(Vertex.BR)))
        load = (0.0, -config.force / len(loaded))

        top_row = [v for v in (robot.voxels.get(x, 0) for x in range(width)) if v is not None]
        if not top_row:
            raise GeometryError("top row has no voxels")
        top_y0 = [v.center().y for v in top_row]
        y0 = reference.center().y
        ys: list[float] = []
        real_ts: list[float] = []
        sim_ts: list[float] = []
        steps = 0
        t = 0.0
        start = time.perf_counter()
        while t < config.final_t:
            if config.force_duration > 0.0 and t <= config.force_duration:
                for body in loaded:
                    body.apply_force_at_world_point(load, body.position)
            steps += 1
            t = self._steps_elapsed(steps)
            step_world(space, self.settings)
            self._notify(sink, t, objects)
            ys.append(reference.center().y - y0)
            real_ts.append(time.perf_counter() - start)
            sim_ts.append(t)
        real_time = time.perf_counter() - start

        index = damping_index(ys, config.epsilon)
        n_voxels = robot.n_voxels
        window = throughput(n_voxels, index, sim_ts[index], real_ts[index])
        overall = throughput(n_voxels, steps, sim_ts[-1], real_time)

        top_positions = tuple(
            Point2(v.center().x, v.center().y - start_y) for v, start_y in zip(top_row, top_y0)
        )
        logger.debug(
            "cantilever finished: %d steps, damping index %d, y=%.6f",
            steps,
            index,
            top_positions[-1].y,
        )
        return CantileverResult(
            real_time=real_time,
            damping_real_time=real_ts[index],
            damping_sim_time=sim_ts[index],
            steps=steps,
            damping_steps=index,
            damping_voxel_steps_per_second=window.voxel_steps_per_second,
            damping_voxel_sim_seconds_per_second=window.voxel_sim_seconds_per_second,
            damping_steps_per_second=window.steps_per_second,
            overall_voxel_steps_per_second=overall.voxel_steps_per_second,
            overall_voxel_sim_seconds_per_second=overall.voxel_sim_seconds_per_second,
            overall_steps_per_second=overall.steps_per_second,
            y_displacement=top_positions[-1].y,
            time_evolution=dict(zip(TIME_EVOLUTION_KEYS, (tuple(sim_ts), tuple(real_ts), tuple(ys)))),
            final_top_positions=top_positions,
        )
