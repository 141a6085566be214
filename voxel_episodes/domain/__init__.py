"""Domain layer: grids, geometry, terrain, voxels, robots and world objects."""

from voxel_episodes.domain.geometry import BoundingBox, GeometryError, Point2
from voxel_episodes.domain.grid import Grid, GridEntry
from voxel_episodes.domain.objects import Ground, Wall, WorldObject
from voxel_episodes.domain.placement import placement_translation
from voxel_episodes.domain.robot import Robot, RobotDescription, sinusoidal_controller
from voxel_episodes.domain.snapshot import (
    FixtureState,
    RobotState,
    Snapshot,
    SnapshotSink,
    VoxelState,
)
from voxel_episodes.domain.terrain import TerrainProfile, generate_terrain
from voxel_episodes.domain.voxel import Sensor, Vertex, Voxel, weld

__all__ = [
    "BoundingBox",
    "FixtureState",
    "GeometryError",
    "Grid",
    "GridEntry",
    "Ground",
    "Point2",
    "Robot",
    "RobotDescription",
    "RobotState",
    "Sensor",
    "Snapshot",
    "SnapshotSink",
    "TerrainProfile",
    "Vertex",
    "Voxel",
    "VoxelState",
    "Wall",
    "WorldObject",
    "generate_terrain",
    "placement_translation",
    "sinusoidal_controller",
    "weld",
]
