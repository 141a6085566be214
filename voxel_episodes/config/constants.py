"""Centralized domain constants for soft-robot episodes.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GROUND_HILLS_N = 100
"""Number of randomized interior vertices of the locomotion terrain."""

GROUND_LENGTH = 1000.0
"""Total horizontal extent of the locomotion terrain."""

GROUND_SEED = 1
"""Seed of the terrain random source, shared by every locomotion trial."""

INITIAL_PLACEMENT_X_GAP = 1.0
"""Horizontal offset of the robot's left edge from the first hill vertex."""

INITIAL_PLACEMENT_Y_GAP = 1.0
"""Vertical clearance between the robot's bottom and the terrain."""

WALL_MARGIN = 10.0
"""Extra wall height above and below the clamped robot."""

WALL_WIDTH = 1.0
"""Horizontal thickness of the cantilever anchor wall."""

DEFAULT_STEP_INTERVAL = 1.0 / 60.0
"""Default simulated seconds advanced by one physics step."""

DEFAULT_SOLVER_ITERATIONS = 10
"""Default constraint solver iteration count."""

GRAVITY = (0.0, -9.81)
"""Gravity vector used by terrain episodes."""

VOXEL_SIDE_LENGTH = 3.0
"""Default voxel side length."""

VOXEL_MASS = 1.0
"""Default total voxel mass, split evenly across its four vertex bodies."""

BROKEN_SPRING_TOLERANCE = 0.5
"""Relative length deviation beyond which a spring counts as broken."""

TERRAIN_SEGMENT_RADIUS = 0.1
"""Collision radius of terrain segments."""

SURFACE_FRICTION = 1.0
"""Friction coefficient of every collision shape."""

ROBOT_COLLISION_GROUP = 1
"""Shape-filter group shared by the vertex bodies of one robot."""
