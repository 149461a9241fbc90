"""
Value types shared by the engines, the feature source and the renderer.

Everything here is immutable. A Scene is produced whole by one render
pass and replaced whole by the next.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class GeoPoint:
    """WGS84 position in degrees."""

    latitude: float
    longitude: float

    def as_latlon(self):
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class RoadSegment:
    """OSM way tagged ``highway``; ``category`` is the highway value."""

    points: tuple
    category: str
    tags: dict = field(default_factory=dict, compare=False)
    osm_id: int | None = None


@dataclass(frozen=True)
class BuildingFootprint:
    """OSM way tagged ``building``; the ring may be open or closed."""

    points: tuple
    tags: dict = field(default_factory=dict, compare=False)
    osm_id: int | None = None

    @property
    def is_valid(self):
        return len(self.points) >= 3


@dataclass(frozen=True)
class SunPosition:
    """Sun angles in radians.

    ``azimuth`` is measured clockwise from north. ``altitude`` <= 0 means
    the sun is at or below the horizon.
    """

    azimuth: float
    altitude: float

    @property
    def above_horizon(self):
        return self.altitude > 0


@dataclass(frozen=True)
class LitQuad:
    """Four corners (p1+o, p2+o, p2-o, p1-o) around one lit sub-segment."""

    corners: tuple
    kind: str = 'lit'


@dataclass(frozen=True)
class ShadowVector:
    """Displacement of a building's shadow: length in meters, direction in
    radians clockwise from north."""

    length_m: float
    direction: float
    height_m: float = 0.0


@dataclass(frozen=True)
class FeatureSet:
    """Roads and buildings from one fetch. Replaced by reference, never mutated."""

    roads: tuple = ()
    buildings: tuple = ()
    center: GeoPoint | None = None

    @property
    def is_empty(self):
        return not self.roads and not self.buildings


@dataclass(frozen=True)
class Scene:
    """Everything one render pass produced for a (location, hour) pair."""

    location: GeoPoint
    hour: int
    instant: datetime
    sun: SunPosition
    lit_quads: tuple = ()
    buildings: tuple = ()
    shadow_vectors: tuple = ()
    shadow_polygons: tuple = ()

    @property
    def is_daylight(self):
        return self.sun.above_horizon
