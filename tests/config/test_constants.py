from voxel_episodes.config.constants import (
    BROKEN_SPRING_TOLERANCE,
    DEFAULT_SOLVER_ITERATIONS,
    DEFAULT_STEP_INTERVAL,
    GRAVITY,
    GROUND_HILLS_N,
    GROUND_LENGTH,
    INITIAL_PLACEMENT_X_GAP,
    INITIAL_PLACEMENT_Y_GAP,
    VOXEL_MASS,
    VOXEL_SIDE_LENGTH,
    WALL_MARGIN,
    WALL_WIDTH,
)


def test_terrain_spacing_exceeds_first_vertex_offset() -> None:
    assert isinstance(GROUND_HILLS_N, int) and GROUND_HILLS_N > 0
    assert GROUND_LENGTH / GROUND_HILLS_N > 1.0


def test_placement_gaps_are_non_negative() -> None:
    assert INITIAL_PLACEMENT_X_GAP >= 0.0
    assert INITIAL_PLACEMENT_Y_GAP >= 0.0


def test_step_defaults_are_positive() -> None:
    assert DEFAULT_STEP_INTERVAL > 0.0
    assert isinstance(DEFAULT_SOLVER_ITERATIONS, int) and DEFAULT_SOLVER_ITERATIONS >= 1


def test_gravity_points_down() -> None:
    assert GRAVITY[0] == 0.0
    assert GRAVITY[1] < 0.0


def test_voxel_defaults_are_positive() -> None:
    assert VOXEL_SIDE_LENGTH > 0.0
    assert VOXEL_MASS > 0.0


def test_wall_dimensions() -> None:
    assert WALL_WIDTH > 0.0
    assert WALL_MARGIN >= 0.0


def test_broken_spring_tolerance_is_fraction() -> None:
    assert 0.0 < BROKEN_SPRING_TOLERANCE < 1.0
