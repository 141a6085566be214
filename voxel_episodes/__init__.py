"""Time-stepped episodes and concurrent sweeps for voxel-based soft robots."""

__version__ = "0.1.0"
