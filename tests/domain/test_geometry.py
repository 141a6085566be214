"""Tests for voxel_episodes.domain.geometry."""

from __future__ import annotations

import pytest

from voxel_episodes.domain.geometry import BoundingBox, GeometryError, Point2


def test_point_arithmetic() -> None:
    assert Point2(1.0, 2.0) + Point2(0.5, -1.0) == Point2(1.5, 1.0)
    assert Point2(1.0, 2.0) - Point2(1.0, 1.0) == Point2(0.0, 1.0)


class TestBoundingBox:
    def test_of_points(self) -> None:
        bbox = BoundingBox.of([Point2(1, 5), Point2(-2, 3), Point2(4, 0)])
        assert bbox.min == Point2(-2, 0)
        assert bbox.max == Point2(4, 5)
        assert bbox.width == 6
        assert bbox.height == 5

    def test_empty_points(self) -> None:
        with pytest.raises(GeometryError):
            BoundingBox.of([])

    def test_degenerate(self) -> None:
        assert BoundingBox(Point2(1, 0), Point2(0, 1)).is_degenerate()
        assert not BoundingBox(Point2(0, 0), Point2(0, 0)).is_degenerate()

    def test_geometry_error_is_value_error(self) -> None:
        assert issubclass(GeometryError, ValueError)
