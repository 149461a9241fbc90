"""Shared fixtures and builders for the sunstreets tests."""

import math
from datetime import date

import pytest

from sunstreets.models import BuildingFootprint, FeatureSet, GeoPoint, RoadSegment, SunPosition

PARIS = GeoPoint(48.8566, 2.3522)
TODAY = date(2026, 6, 21)


def make_sun(azimuth_deg, altitude_deg):
    return SunPosition(azimuth=math.radians(azimuth_deg), altitude=math.radians(altitude_deg))


def make_road(coords, category='residential', **tags):
    tags = {'highway': category, **tags}
    return RoadSegment(points=tuple(GeoPoint(lat, lon) for lat, lon in coords),
                       category=category, tags=tags)


def make_building(coords, **tags):
    tags = {'building': 'yes', **tags}
    return BuildingFootprint(points=tuple(GeoPoint(lat, lon) for lat, lon in coords), tags=tags)


def square_building(lat=48.8566, lon=2.3522, size=0.0001, **tags):
    return make_building([(lat, lon), (lat, lon + size), (lat + size, lon + size),
                          (lat + size, lon)], **tags)


class FixedSun:
    """Stand-in solar provider that records its calls."""

    def __init__(self, azimuth_deg, altitude_deg):
        self.sun = make_sun(azimuth_deg, altitude_deg)
        self.calls = []

    def __call__(self, instant, latitude, longitude):
        self.calls.append((instant, latitude, longitude))
        return self.sun


@pytest.fixture
def paris():
    return PARIS


@pytest.fixture
def east_west_road():
    # Bearing 90 degrees (p1 -> p2 heads due east)
    return make_road([(48.8566, 2.3522), (48.8566, 2.3542)])


@pytest.fixture
def north_south_road():
    return make_road([(48.8556, 2.3522), (48.8576, 2.3522)])


@pytest.fixture
def features(east_west_road, north_south_road):
    return FeatureSet(
        roads=(east_west_road, north_south_road),
        buildings=(square_building(**{'building:levels': '4'}),),
        center=PARIS,
    )
