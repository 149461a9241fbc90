"""
Planar approximations between degrees and local meters.

Degree lengths are treated as constant around the query point, which is
good enough at city scale (a few hundred meters).
"""

import math

import numpy as np

from . import config


def meters_to_degrees(dx, dy, m_per_deg_lat=config.METERS_PER_DEG_LAT,
                      m_per_deg_lon=config.METERS_PER_DEG_LON):
    """
    Convert an east/north displacement in meters to (dlat, dlon) degrees.
    """
    return dy / m_per_deg_lat, dx / m_per_deg_lon


def degrees_to_meters(dlat, dlon, m_per_deg_lat=config.METERS_PER_DEG_LAT,
                      m_per_deg_lon=config.METERS_PER_DEG_LON):
    """
    Convert a (dlat, dlon) offset in degrees to (dx east, dy north) meters.
    """
    return dlon * m_per_deg_lon, dlat * m_per_deg_lat


def bearing_deg(a, b):
    """
    Bearing from GeoPoint ``a`` to ``b`` in degrees, 0=N clockwise, in [0, 360).

    Computed directly on degree deltas, ``atan2(dlon, dlat)``.
    """
    dlon = b.longitude - a.longitude
    dlat = b.latitude - a.latitude
    return (math.degrees(math.atan2(dlon, dlat)) + 360.0) % 360.0


def circular_distance(a_deg, b_deg):
    """Smallest angle between two bearings, in [0, 180]."""
    diff = abs(a_deg - b_deg) % 360.0
    return min(diff, 360.0 - diff)


def segment_length_m(a, b):
    dx, dy = degrees_to_meters(b.latitude - a.latitude, b.longitude - a.longitude)
    return math.hypot(dx, dy)


def ring_coords(points):
    """
    (N, 2) array of (lon, lat) for a ring of GeoPoints, the axis order
    shapely expects.
    """
    ring = np.array([(p.longitude, p.latitude) for p in points], dtype=float)
    if ring.size == 0:
        return ring.reshape(0, 2)
    return ring
