"""Configuration dataclasses and result containers for soft-robot episodes.

All frozen dataclasses that parameterise the physics settings, voxel
material, locomotion and cantilever episodes, and sweep trials live here,
together with the immutable results the episodes produce.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from voxel_episodes.config.constants import (
    DEFAULT_SOLVER_ITERATIONS,
    DEFAULT_STEP_INTERVAL,
    GROUND_HILLS_N,
    GROUND_LENGTH,
    GROUND_SEED,
    INITIAL_PLACEMENT_X_GAP,
    INITIAL_PLACEMENT_Y_GAP,
    VOXEL_MASS,
    VOXEL_SIDE_LENGTH,
    WALL_MARGIN,
)

if TYPE_CHECKING:
    from voxel_episodes.domain.geometry import Point2

__all__ = [
    "CantileverConfig",
    "CantileverResult",
    "LocomotionConfig",
    "LocomotionResult",
    "Settings",
    "SpringScaffolding",
    "TaskConfig",
    "TrialConfig",
    "VoxelMaterial",
]

# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocomotionResult:
    """Throughput and health metrics of one locomotion episode."""

    real_time: float
    steps: int
    overall_voxel_steps_per_second: float
    overall_voxel_sim_seconds_per_second: float
    overall_steps_per_second: float
    avg_broken_ratio: float
    max_velocity_magnitude: float


@dataclass(frozen=True)
class CantileverResult:
    """Bending displacement, settling time and throughput of one cantilever episode."""

    real_time: float
    damping_real_time: float
    damping_sim_time: float
    steps: int
    damping_steps: int
    damping_voxel_steps_per_second: float
    damping_voxel_sim_seconds_per_second: float
    damping_steps_per_second: float
    overall_voxel_steps_per_second: float
    overall_voxel_sim_seconds_per_second: float
    overall_steps_per_second: float
    y_displacement: float
    time_evolution: dict[str, tuple[float, ...]] = field(repr=False)
    """Per-step series keyed by ``st`` (sim time), ``rt`` (wall time), ``y``."""
    final_top_positions: tuple[Point2, ...] = field(repr=False)


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


class SpringScaffolding(Enum):
    """Groups of spring-dampers that can be enabled inside a voxel."""

    SIDE_EXTERNAL = "side_external"
    SIDE_INTERNAL = "side_internal"
    SIDE_CROSS = "side_cross"
    CENTRAL_CROSS = "central_cross"


@dataclass(frozen=True)
class Settings:
    """Physics world knobs shared by every episode kind."""

    step_interval: float = DEFAULT_STEP_INTERVAL
    solver_iterations: int = DEFAULT_SOLVER_ITERATIONS

    def __post_init__(self) -> None:
        if not self.step_interval > 0.0:
            raise ValueError("step_interval must be > 0")
        if self.solver_iterations < 1:
            raise ValueError("solver_iterations must be >= 1")


@dataclass(frozen=True)
class VoxelMaterial:
    """Immutable description of one soft voxel."""

    side_length: float = VOXEL_SIDE_LENGTH
    mass: float = VOXEL_MASS
    spring_f: float = 8.0
    """Spring natural frequency in Hz."""
    spring_d: float = 0.3
    """Spring damping ratio."""
    mass_linear_damping: float = 0.5
    mass_angular_damping: float = 0.5
    mass_side_length_ratio: float = 0.35
    """Side of each corner mass as a fraction of the voxel side."""
    max_length_ratio: float = 0.2
    """Spring rest-length change at full actuation, as a fraction of rest length."""
    mass_collision_flag: bool = False
    limit_contraction_flag: bool = True
    spring_scaffoldings: frozenset[SpringScaffolding] = frozenset(SpringScaffolding)

    def __post_init__(self) -> None:
        if not self.side_length > 0.0:
            raise ValueError("side_length must be > 0")
        if not self.mass > 0.0:
            raise ValueError("mass must be > 0")
        if not self.spring_f > 0.0:
            raise ValueError("spring_f must be > 0")
        if self.spring_d < 0.0:
            raise ValueError("spring_d must be >= 0")
        if self.mass_linear_damping < 0.0 or self.mass_angular_damping < 0.0:
            raise ValueError("mass damping values must be >= 0")
        if not 0.0 < self.mass_side_length_ratio < 0.5:
            raise ValueError("mass_side_length_ratio must be in (0.0, 0.5)")
        if not 0.0 <= self.max_length_ratio < 1.0:
            raise ValueError("max_length_ratio must be in [0.0, 1.0)")
        if not self.spring_scaffoldings:
            raise ValueError("spring_scaffoldings must not be empty")
        if not all(isinstance(s, SpringScaffolding) for s in self.spring_scaffoldings):
            raise ValueError("spring_scaffoldings must contain SpringScaffolding values")


@dataclass(frozen=True)
class LocomotionConfig:
    """Runtime parameters for the locomotion-over-terrain episode."""

    final_t: float = 50.0
    ground_hills_height: float = 5.0
    frequency: float = 1.0
    """Frequency of the default travelling-wave controller, in Hz."""
    ground_hills_n: int = GROUND_HILLS_N
    ground_length: float = GROUND_LENGTH
    ground_seed: int = GROUND_SEED
    placement_x_gap: float = INITIAL_PLACEMENT_X_GAP
    placement_y_gap: float = INITIAL_PLACEMENT_Y_GAP

    def __post_init__(self) -> None:
        if not self.final_t > 0.0:
            raise ValueError("final_t must be > 0")
        if self.ground_hills_height < 0.0:
            raise ValueError("ground_hills_height must be >= 0")
        if self.frequency < 0.0:
            raise ValueError("frequency must be >= 0")
        if self.ground_hills_n < 1:
            raise ValueError("ground_hills_n must be >= 1")
        if self.ground_length < 0.0:
            raise ValueError("ground_length must be >= 0")


@dataclass(frozen=True)
class CantileverConfig:
    """Runtime parameters for the cantilever-bending episode."""

    force: float = 30.0
    force_duration: float = 0.1
    final_t: float = 30.0
    epsilon: float = 0.01
    """Tolerance of the damping-point detection."""
    wall_margin: float = WALL_MARGIN

    def __post_init__(self) -> None:
        if not self.final_t > 0.0:
            raise ValueError("final_t must be > 0")
        if self.force_duration < 0.0:
            raise ValueError("force_duration must be >= 0")
        if self.epsilon < 0.0:
            raise ValueError("epsilon must be >= 0")
        if self.wall_margin < 0.0:
            raise ValueError("wall_margin must be >= 0")


TaskConfig = LocomotionConfig | CantileverConfig


@dataclass(frozen=True)
class TrialConfig:
    """Fully resolved configuration of one sweep trial."""

    settings: Settings = field(default_factory=Settings)
    voxel: VoxelMaterial = field(default_factory=VoxelMaterial)
    task: TaskConfig = field(default_factory=LocomotionConfig)
