"""Tests for road path generation."""

import math

import pytest

from py_atlas.core.roads import generate_road_path


class TestShortRoads:
    """Test the single-curve short route."""

    def test_known_curve(self):
        """Test control point placement for a short horizontal road."""
        path = generate_road_path((0, 0), (30, 0), seed=0, curviness=0.3)
        # seeded_random(0) == 0, so the control point bows 4.5 units to one side
        assert str(path) == "M 0 0 Q 15 -4.5 30 0"

    def test_single_segment_long_road(self):
        """Test that fewer than 2 segments always uses one curve."""
        path = generate_road_path((0, 0), (400, 300), seed=9, segments=1)
        assert [c.op for c in path.commands] == ["M", "Q"]

    def test_zero_curviness_is_straight(self):
        """Test that the control point sits on the midpoint without curviness."""
        path = generate_road_path((0, 0), (20, 20), seed=5, curviness=0)
        assert path.commands[1].coords[:2] == (10.0, 10.0)


class TestLongRoads:
    """Test the multi-waypoint route."""

    @pytest.mark.parametrize("segments", [2, 3, 4, 8])
    def test_command_count(self, segments):
        """Test one curve per segment after the move."""
        path = generate_road_path((10, 10), (600, 400), seed=1234, segments=segments)
        assert len(path) == 1 + segments
        assert all(c.op == "Q" for c in path.commands[1:])

    @pytest.mark.parametrize("curviness", [0, 0.3, 1.0])
    @pytest.mark.parametrize("segments", [1, 3, 6])
    def test_endpoint_fidelity(self, curviness, segments):
        """Test that the road starts and ends exactly at its endpoints."""
        start, end = (12.5, 40.25), (731.0, 512.75)
        path = generate_road_path(start, end, seed=99, curviness=curviness, segments=segments)

        assert path.start == start
        assert path.end == end
        assert not path.is_closed

    def test_determinism(self):
        """Test that identical arguments give identical paths."""
        a = generate_road_path((0, 0), (500, 120), seed=31337, curviness=0.35, segments=4)
        b = generate_road_path((0, 0), (500, 120), seed=31337, curviness=0.35, segments=4)
        assert str(a) == str(b)

    def test_seed_changes_route(self):
        a = generate_road_path((0, 0), (500, 120), seed=1, segments=4)
        b = generate_road_path((0, 0), (500, 120), seed=2, segments=4)
        assert str(a) != str(b)

    def test_straight_without_curviness(self):
        """Test that zero curviness keeps every point on the straight line."""
        path = generate_road_path((0, 0), (300, 0), seed=8, curviness=0, segments=5)
        for command in path.commands:
            for y in command.coords[1::2]:
                assert y == pytest.approx(0.0, abs=1e-9)

    def test_waypoints_stay_near_route(self):
        """Test that offsets are bounded by the curviness envelope."""
        distance = 500.0
        curviness = 0.5
        path = generate_road_path((0, 0), (distance, 0), seed=4, curviness=curviness, segments=4)
        limit = distance * curviness * 0.4
        for command in path.commands:
            for y in command.coords[1::2]:
                assert abs(y) <= limit + 1e-9


class TestDegenerateRoads:
    """Test zero-length roads."""

    def test_zero_distance(self):
        """Test that identical endpoints give a finite point path."""
        path = generate_road_path((5, 5), (5, 5), seed=3)

        assert str(path) == "M 5 5 L 5 5"
        assert path.is_finite()
        assert path.start == path.end == (5.0, 5.0)

    def test_non_finite_input_propagates(self):
        """Test that NaN coordinates flow through rather than raising."""
        path = generate_road_path((0, 0), (math.nan, 10), seed=3)
        assert not path.is_finite()
