"""
Scene composition: one render pass for a (location, hour) pair.

Sun angles and all derived geometry are recomputed on every call; a new
Scene replaces the previous one outright.
"""

import logging
import math

import pandas as pd

from . import config
from .exposure import compute_lit_quads, lit_length_m
from .models import Scene
from .shadows import compute_shadow_polygons, compute_shadow_vectors
from .solar import instant_for_hour, sun_position

logger = logging.getLogger(__name__)


def compose_scene(location, hour, features, today=None, sun_provider=sun_position,
                  road_width_m=config.ROAD_WIDTH_M,
                  max_shadow_length_m=config.MAX_SHADOW_LENGTH_M):
    """
    Compose the lit streets and building shadows for ``hour`` today.

    Parameters
    ----------
    location : GeoPoint
        Point the sun position is evaluated at.
    hour : int
        Hour of day, 0-23, UTC.
    features : FeatureSet
        Roads and buildings around ``location``.
    today : date, optional
        Calendar date to use; defaults to the current UTC date.
    sun_provider : callable
        ``(instant, latitude, longitude) -> SunPosition``. Called once.

    Returns
    -------
    Scene
    """
    instant = instant_for_hour(hour, today)
    sun = sun_provider(instant, location.latitude, location.longitude)

    quads = compute_lit_quads(features.roads, sun, road_width_m)
    vectors = compute_shadow_vectors(features.buildings, sun)
    shadow_polys = compute_shadow_polygons(features.buildings, sun, max_shadow_length_m)
    buildings = tuple(b for b in features.buildings if b.is_valid) if sun.above_horizon else ()

    logger.debug("Scene %02d:00 UTC at (%.5f, %.5f): alt=%.1f az=%.1f, %d lit quads, %d buildings",
                 hour, location.latitude, location.longitude,
                 math.degrees(sun.altitude), math.degrees(sun.azimuth),
                 len(quads), len(buildings))

    return Scene(
        location=location,
        hour=hour,
        instant=instant,
        sun=sun,
        lit_quads=tuple(quads),
        buildings=buildings,
        shadow_vectors=tuple(vectors),
        shadow_polygons=tuple(shadow_polys),
    )


def hourly_profile(location, features, hours=range(24), today=None,
                   sun_provider=sun_position, road_width_m=config.ROAD_WIDTH_M):
    """
    Per-hour summary of lit street coverage.

    Returns
    -------
    pandas.DataFrame
        Indexed by hour with columns ``altitude_deg``, ``azimuth_deg``,
        ``lit_quads`` and ``lit_length_m``.
    """
    rows = []
    for hour in hours:
        scene = compose_scene(location, hour, features, today=today,
                              sun_provider=sun_provider, road_width_m=road_width_m)
        rows.append({
            'hour': hour,
            'altitude_deg': round(math.degrees(scene.sun.altitude), 1),
            'azimuth_deg': round(math.degrees(scene.sun.azimuth), 1),
            'lit_quads': len(scene.lit_quads),
            'lit_length_m': round(lit_length_m(scene.lit_quads), 1),
        })
    return pd.DataFrame(rows, columns=['hour', 'altitude_deg', 'azimuth_deg',
                                       'lit_quads', 'lit_length_m']).set_index('hour')
