"""Simulation throughput figures derived from step counts and wall time."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Throughput:
    voxel_steps_per_second: float
    voxel_sim_seconds_per_second: float
    steps_per_second: float


def _rate(amount: float, real_time: float) -> float:
    if real_time <= 0.0:
        return float("inf") if amount > 0 else 0.0
    return amount / real_time


def throughput(n_voxels: int, steps: int, sim_time: float, real_time: float) -> Throughput:
    """Rates of a window of *steps* steps covering *sim_time* simulated seconds.

    A zero-length wall-clock window yields ``inf`` for any positive amount.
    """
    if n_voxels < 0 or steps < 0:
        raise ValueError("n_voxels and steps must be >= 0")
    return Throughput(
        voxel_steps_per_second=_rate(n_voxels * steps, real_time),
        voxel_sim_seconds_per_second=_rate(n_voxels * sim_time, real_time),
        steps_per_second=_rate(steps, real_time),
    )
