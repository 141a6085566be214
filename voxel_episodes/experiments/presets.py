"""Built-in sweeps used when no parameters are given on the command line."""

from __future__ import annotations

from voxel_episodes.config.types import (
    CantileverConfig,
    LocomotionConfig,
    SpringScaffolding,
    TaskConfig,
)
from voxel_episodes.experiments.sweep import Shape

TASK_NAMES: tuple[str, ...] = ("locomotion", "cantilever")

SCAFFOLDING_VARIANTS: tuple[frozenset[SpringScaffolding], ...] = (
    frozenset(SpringScaffolding),
    frozenset(
        {
            SpringScaffolding.SIDE_EXTERNAL,
            SpringScaffolding.SIDE_INTERNAL,
            SpringScaffolding.CENTRAL_CROSS,
        }
    ),
    frozenset(
        {
            SpringScaffolding.SIDE_EXTERNAL,
            SpringScaffolding.SIDE_INTERNAL,
            SpringScaffolding.SIDE_CROSS,
        }
    ),
    frozenset({SpringScaffolding.SIDE_EXTERNAL, SpringScaffolding.CENTRAL_CROSS}),
)
"""Scaffolding sets compared by both preset sweeps; the full set is the baseline."""


def default_task(name: str) -> TaskConfig:
    if name == "locomotion":
        return LocomotionConfig(final_t=50.0, ground_hills_height=5.0, frequency=1.0)
    if name == "cantilever":
        return CantileverConfig(force=30.0, force_duration=0.1, final_t=30.0, epsilon=0.01)
    raise ValueError(f"task must be one of {', '.join(TASK_NAMES)}, got {name!r}")


def preset_shapes(name: str) -> tuple[Shape, ...]:
    if name == "locomotion":
        return tuple(Shape(w, 3) for w in range(15, 2, -1))
    if name == "cantilever":
        return (Shape(15, 4), Shape(10, 4), Shape(20, 4))
    raise ValueError(f"task must be one of {', '.join(TASK_NAMES)}, got {name!r}")


def preset_params(name: str) -> dict[str, tuple[object, ...]]:
    if name == "locomotion":
        return {
            "settings.step_interval": (0.015, 0.005, 0.01, 0.02, 0.025),
            "voxel.spring_scaffoldings": SCAFFOLDING_VARIANTS,
        }
    if name == "cantilever":
        return {
            "voxel.spring_f": (8.0, 4.0, 10.0, 15.0, 20.0, 25.0, 30.0),
            "voxel.spring_scaffoldings": SCAFFOLDING_VARIANTS,
        }
    raise ValueError(f"task must be one of {', '.join(TASK_NAMES)}, got {name!r}")


def preset_repetitions(name: str) -> int:
    return 5 if name == "locomotion" else 1
