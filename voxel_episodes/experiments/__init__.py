"""Experiments layer: trial enumeration, concurrent sweeps and built-in presets."""

from voxel_episodes.experiments.sweep import (
    Shape,
    SweepConfig,
    SweepOutcome,
    Trial,
    enumerate_trials,
    run_sweep,
)
from voxel_episodes.experiments.tasks import run_config, run_trial

__all__ = [
    "Shape",
    "SweepConfig",
    "SweepOutcome",
    "Trial",
    "enumerate_trials",
    "run_config",
    "run_sweep",
    "run_trial",
]
