"""Simulation layer: world assembly and the stepped episode loops."""

from voxel_episodes.simulation.cantilever import CantileverEpisode
from voxel_episodes.simulation.episode import Episode
from voxel_episodes.simulation.locomotion import LocomotionEpisode
from voxel_episodes.simulation.world import assemble_world

__all__ = [
    "CantileverEpisode",
    "Episode",
    "LocomotionEpisode",
    "assemble_world",
]
