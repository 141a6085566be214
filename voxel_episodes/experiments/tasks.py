"""Dispatch of a sweep trial to the episode kind selected by its task config."""

from __future__ import annotations

from typing import TYPE_CHECKING

from voxel_episodes.config.types import (
    CantileverConfig,
    CantileverResult,
    LocomotionConfig,
    LocomotionResult,
    TrialConfig,
)
from voxel_episodes.domain.robot import RobotDescription
from voxel_episodes.simulation.cantilever import CantileverEpisode
from voxel_episodes.simulation.locomotion import LocomotionEpisode

if TYPE_CHECKING:
    from voxel_episodes.experiments.sweep import Trial


def run_config(
    config: TrialConfig, width: int, height: int
) -> LocomotionResult | CantileverResult:
    """Run one episode of a full ``width`` x ``height`` robot."""
    description = RobotDescription.filled(width, height, config.voxel)
    task = config.task
    if isinstance(task, LocomotionConfig):
        return LocomotionEpisode(task, config.settings).apply(description)
    if isinstance(task, CantileverConfig):
        return CantileverEpisode(task, config.settings).apply(description)
    raise TypeError(f"unsupported task config {type(task).__name__}")


def run_trial(trial: Trial) -> LocomotionResult | CantileverResult:
    return run_config(trial.config, trial.shape.width, trial.shape.height)
