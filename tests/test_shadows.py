"""Tests for building height estimation and shadow projection."""

import math

import pytest
from shapely.affinity import translate
from shapely.geometry import Polygon

from conftest import make_building, make_sun, square_building
from sunstreets import config
from sunstreets.shadows import (
    compute_shadow_polygons,
    compute_shadow_vectors,
    estimate_height,
    project_shadow,
    shadow_offset_degrees,
    shadow_offset_m,
    shadow_vector,
)


class TestEstimateHeight:
    def test_explicit_height_wins_over_levels(self):
        assert estimate_height({'building:height': '15', 'building:levels': '4'}) == 15.0

    def test_levels_times_three(self):
        assert estimate_height({'building:levels': '4'}) == 12.0

    def test_default_height(self):
        assert estimate_height({}) == 10.0
        assert estimate_height(None) == 10.0

    def test_height_with_unit_suffix(self):
        assert estimate_height({'building:height': '12.5 m'}) == 12.5

    def test_levels_read_as_leading_integer(self):
        assert estimate_height({'building:levels': '3.5'}) == 9.0

    def test_unparseable_height_falls_through(self):
        assert estimate_height({'building:height': 'tall', 'building:levels': '2'}) == 6.0
        assert estimate_height({'building:height': 'tall'}) == 10.0
        assert estimate_height({'building:levels': 'many'}) == 10.0

    def test_non_positive_values_fall_through(self):
        assert estimate_height({'building:height': '0', 'building:levels': '2'}) == 6.0
        assert estimate_height({'building:levels': '-1'}) == 10.0

    def test_custom_defaults(self):
        assert estimate_height({}, default=7.0) == 7.0
        assert estimate_height({'building:levels': '2'}, meters_per_level=4.0) == 8.0


class TestShadowVector:
    def test_three_levels_at_45_degrees(self):
        b = square_building(**{'building:levels': '3'})
        (vec,) = compute_shadow_vectors([b], make_sun(180.0, 45.0))
        assert vec.height_m == 9.0
        assert vec.length_m == pytest.approx(9.0)

    def test_direction_is_opposite_the_sun(self):
        sun = make_sun(135.0, 30.0)
        vec = shadow_vector(10.0, sun)
        assert vec.direction == pytest.approx(sun.azimuth + math.pi)

    def test_length_decreases_with_altitude(self):
        lengths = [shadow_vector(10.0, make_sun(180.0, alt)).length_m
                   for alt in (0.5, 5.0, 15.0, 30.0, 45.0, 60.0, 80.0, 89.9)]
        assert all(a > b for a, b in zip(lengths, lengths[1:]))
        assert lengths[-1] < 0.1

    def test_length_increases_with_height(self):
        sun = make_sun(200.0, 35.0)
        lengths = [shadow_vector(h, sun).length_m for h in (3.0, 9.0, 10.0, 30.0, 120.0)]
        assert all(a < b for a, b in zip(lengths, lengths[1:]))

    def test_near_horizon_is_large_not_an_error(self):
        vec = shadow_vector(10.0, make_sun(180.0, 0.01))
        assert vec.length_m > 10000.0

    def test_no_vector_with_sun_down(self):
        assert shadow_vector(10.0, make_sun(180.0, 0.0)) is None

    def test_offset_points_away_from_sun(self):
        # Sun due south: shadow falls north
        vec = shadow_vector(10.0, make_sun(180.0, 45.0))
        dx, dy = shadow_offset_m(vec)
        assert dx == pytest.approx(0.0, abs=1e-9)
        assert dy == pytest.approx(10.0)
        dlat, dlon = shadow_offset_degrees(vec)
        assert dlat == pytest.approx(10.0 / config.METERS_PER_DEG_LAT)
        assert dlon == pytest.approx(0.0, abs=1e-12)

    def test_offset_for_morning_sun(self):
        # Sun due east: shadow falls west
        dx, dy = shadow_offset_m(shadow_vector(10.0, make_sun(90.0, 45.0)))
        assert dx == pytest.approx(-10.0)
        assert dy == pytest.approx(0.0, abs=1e-9)


class TestComputeShadowVectors:
    @pytest.mark.parametrize("altitude", [0.0, -5.0])
    def test_empty_with_sun_down(self, altitude):
        assert compute_shadow_vectors([square_building()], make_sun(180.0, altitude)) == []

    def test_skips_footprints_under_three_points(self):
        bad = make_building([(48.0, 2.0), (48.0, 2.001)])
        good = square_building()
        vectors = compute_shadow_vectors([bad, good], make_sun(180.0, 30.0))
        assert len(vectors) == 1


class TestShadowPolygons:
    def test_polygon_covers_footprint(self):
        b = square_building(**{'building:height': '20'})
        (poly,) = compute_shadow_polygons([b], make_sun(180.0, 45.0))
        footprint = Polygon([(p.longitude, p.latitude) for p in b.points])
        assert isinstance(poly, Polygon)
        assert poly.is_valid
        assert poly.buffer(1e-12).contains(footprint)
        assert poly.area > footprint.area

    def test_shadow_extends_north_for_southern_sun(self):
        b = square_building(lat=48.0, lon=2.0, size=0.0001, **{'building:height': '20'})
        (poly,) = compute_shadow_polygons([b], make_sun(180.0, 45.0))
        _, miny, _, maxy = poly.bounds
        assert miny == pytest.approx(48.0, abs=1e-9)
        assert maxy == pytest.approx(48.0001 + 20.0 / config.METERS_PER_DEG_LAT, abs=1e-9)

    def test_length_is_clamped(self):
        b = square_building(lat=48.0, lon=2.0, size=0.0001)
        (poly,) = compute_shadow_polygons([b], make_sun(180.0, 0.001), max_length_m=500.0)
        _, _, _, maxy = poly.bounds
        assert maxy == pytest.approx(48.0001 + 500.0 / config.METERS_PER_DEG_LAT, abs=1e-9)
        assert all(math.isfinite(v) for v in poly.bounds)

    def test_non_finite_length_skipped(self):
        vec = shadow_vector(10.0, make_sun(180.0, 30.0))
        inf_vec = type(vec)(length_m=math.inf, direction=vec.direction, height_m=10.0)
        assert project_shadow(square_building(), inf_vec) is None

    def test_empty_with_sun_down(self):
        assert compute_shadow_polygons([square_building()], make_sun(180.0, -1.0)) == []

    def test_hull_contains_translated_footprint(self):
        b = square_building(lat=48.0, lon=2.0, size=0.0001, **{'building:height': '10'})
        vec = shadow_vector(10.0, make_sun(90.0, 45.0))
        poly = project_shadow(b, vec)
        dlat, dlon = shadow_offset_degrees(vec)
        footprint = Polygon([(p.longitude, p.latitude) for p in b.points])
        tip = translate(footprint, xoff=dlon, yoff=dlat)
        assert poly.buffer(1e-12).contains(tip)
        assert poly.bounds[0] == pytest.approx(2.0 - 10.0 / config.METERS_PER_DEG_LON, abs=1e-9)

    def test_invalid_footprint_has_no_outline(self):
        vec = shadow_vector(10.0, make_sun(180.0, 30.0))
        assert project_shadow(make_building([(48.0, 2.0), (48.0, 2.001)]), vec) is None
