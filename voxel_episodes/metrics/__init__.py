"""Metrics layer: settling detection and throughput figures."""

from voxel_episodes.metrics.damping import damping_index
from voxel_episodes.metrics.throughput import Throughput, throughput

__all__ = ["Throughput", "damping_index", "throughput"]
