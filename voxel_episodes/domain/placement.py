"""Initial placement of a robot above a terrain profile."""

from __future__ import annotations

from voxel_episodes.domain.geometry import BoundingBox, GeometryError, Point2
from voxel_episodes.domain.terrain import TerrainProfile


def placement_translation(
    bbox: BoundingBox,
    profile: TerrainProfile,
    x_gap: float,
    y_gap: float,
) -> Point2:
    """Translation that puts *bbox* ``y_gap`` above the ground near its left end.

    The left edge goes ``x_gap`` past profile vertex 1. Ground heights under
    both edges come from the segment between vertices 1 and 2 only; a right
    edge beyond vertex 2 is clamped to it.
    """
    if bbox.is_degenerate():
        raise GeometryError(f"degenerate bounding box {bbox}")
    if len(profile) < 3:
        raise GeometryError("placement needs a profile with at least 3 vertices")
    x_left = profile.xs[1] + x_gap
    x_right = x_left + bbox.width
    h_left = profile.interpolate(1, x_left)
    h_right = profile.interpolate(1, x_right)
    target = Point2(x_left, max(h_left, h_right) + y_gap)
    return target - bbox.min
