"""Unit tests for the Haversine distance model."""

import math

import pytest

from src.domain.distance import EARTH_RADIUS_KM, distance_between, haversine_km
from src.domain.entities import Location

ONE_DEGREE_KM = EARTH_RADIUS_KM * math.pi / 180  # ~111.19 km


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_km(-34.6037, -58.3816, -34.6037, -58.3816) == 0.0

    def test_known_distance(self):
        # Obelisco → Plaza de Mayo is a little under 1 km
        d = haversine_km(-34.6037, -58.3816, -34.6083, -58.3712)
        assert 0.5 < d < 1.5

    def test_symmetric(self):
        d1 = haversine_km(-34.60, -58.38, -34.65, -58.42)
        d2 = haversine_km(-34.65, -58.42, -34.60, -58.38)
        assert abs(d1 - d2) < 1e-9

    def test_one_degree_of_longitude_at_equator(self):
        assert haversine_km(0, 0, 0, 1) == pytest.approx(ONE_DEGREE_KM, rel=1e-12)

    def test_one_degree_of_latitude(self):
        assert haversine_km(10, 20, 11, 20) == pytest.approx(ONE_DEGREE_KM, rel=1e-12)

    def test_antipodes_are_half_circumference(self):
        d = haversine_km(0, 0, 0, 180)
        assert d == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)

    def test_distinct_points_are_positive(self):
        assert haversine_km(-34.6037, -58.3816, -34.6038, -58.3816) > 0

    def test_out_of_range_input_does_not_raise(self):
        """Invalid coordinates are the caller's problem: finite, meaningless."""
        d = haversine_km(200.0, 500.0, -300.0, 42.0)
        assert math.isfinite(d)
        assert d >= 0


class TestDistanceBetween:
    def test_matches_haversine(self):
        a = Location(-34.6037, -58.3816)
        b = Location(-34.5601, -58.4560)
        assert distance_between(a, b) == haversine_km(
            -34.6037, -58.3816, -34.5601, -58.4560
        )

    def test_symmetric(self):
        a = Location(19.0896, 72.8656)
        b = Location(-33.8688, 151.2093)
        assert abs(distance_between(a, b) - distance_between(b, a)) < 1e-9

    def test_identical_locations_are_zero(self):
        a = Location(51.5074, -0.1278)
        assert distance_between(a, Location(51.5074, -0.1278)) == 0.0
