"""Configuration layer: constants, typed config dataclasses and option binding."""

from voxel_episodes.config.binding import ConfigBindingError, bind_option
from voxel_episodes.config.constants import (
    DEFAULT_SOLVER_ITERATIONS,
    DEFAULT_STEP_INTERVAL,
    GRAVITY,
    GROUND_HILLS_N,
    GROUND_LENGTH,
    INITIAL_PLACEMENT_X_GAP,
    INITIAL_PLACEMENT_Y_GAP,
    WALL_MARGIN,
)
from voxel_episodes.config.types import (
    CantileverConfig,
    CantileverResult,
    LocomotionConfig,
    LocomotionResult,
    Settings,
    SpringScaffolding,
    TaskConfig,
    TrialConfig,
    VoxelMaterial,
)

__all__ = [
    "CantileverConfig",
    "CantileverResult",
    "ConfigBindingError",
    "DEFAULT_SOLVER_ITERATIONS",
    "DEFAULT_STEP_INTERVAL",
    "GRAVITY",
    "GROUND_HILLS_N",
    "GROUND_LENGTH",
    "INITIAL_PLACEMENT_X_GAP",
    "INITIAL_PLACEMENT_Y_GAP",
    "LocomotionConfig",
    "LocomotionResult",
    "Settings",
    "SpringScaffolding",
    "TaskConfig",
    "TrialConfig",
    "VoxelMaterial",
    "WALL_MARGIN",
    "bind_option",
]
