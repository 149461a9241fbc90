"""
Street sun exposure.

A road sub-segment is lit when its bearing lies within the tolerance of
the sun-facing azimuth. Each lit sub-segment becomes a thin quad of
``road_width_m`` on either side of the centerline.
"""

import logging
import math

from . import config
from .geometry import bearing_deg, circular_distance, segment_length_m
from .models import GeoPoint, LitQuad

logger = logging.getLogger(__name__)


def sun_facing_azimuth_deg(sun):
    """Sun azimuth turned by 180 degrees and normalized to [0, 360)."""
    return (math.degrees(sun.azimuth) + 180.0) % 360.0


def is_lit(bearing, azimuth_deg, tolerance_deg=config.LIT_TOLERANCE_DEG):
    return circular_distance(bearing, azimuth_deg) < tolerance_deg


def lit_quad(p1, p2, road_width_m=config.ROAD_WIDTH_M):
    """
    Rectangle of half-width ``road_width_m`` around p1 -> p2.

    Returns None for coincident points.
    """
    dx = p2.longitude - p1.longitude
    dy = p2.latitude - p1.latitude
    seg_len = math.hypot(dx, dy)
    if seg_len == 0 or not math.isfinite(seg_len):
        return None

    offset_lat = (road_width_m / config.METERS_PER_DEG_LAT) * (dx / seg_len)
    offset_lon = (road_width_m / config.METERS_PER_DEG_LON) * (-dy / seg_len)
    return LitQuad(corners=(
        GeoPoint(p1.latitude + offset_lat, p1.longitude + offset_lon),
        GeoPoint(p2.latitude + offset_lat, p2.longitude + offset_lon),
        GeoPoint(p2.latitude - offset_lat, p2.longitude - offset_lon),
        GeoPoint(p1.latitude - offset_lat, p1.longitude - offset_lon),
    ))


def compute_lit_quads(roads, sun, road_width_m=config.ROAD_WIDTH_M,
                      tolerance_deg=config.LIT_TOLERANCE_DEG,
                      categories=config.ACCEPTED_ROAD_CATEGORIES):
    """
    Lit-surface quads for every sun-facing sub-segment of ``roads``.

    Parameters
    ----------
    roads : iterable of RoadSegment
    sun : SunPosition
    road_width_m : float
        Offset from the centerline on each side, meters.
    tolerance_deg : float
        Sub-segments strictly closer than this (circular) are lit.
    categories : set of str
        Road categories that take part; others are ignored.

    Returns
    -------
    list of LitQuad
        Empty when the sun is at or below the horizon.
    """
    if sun.altitude <= 0:
        return []

    azimuth_deg = sun_facing_azimuth_deg(sun)
    quads = []
    skipped = 0

    for road in roads:
        if road.category not in categories:
            continue
        points = road.points
        if len(points) < 2:
            skipped += 1
            continue

        for p1, p2 in zip(points[:-1], points[1:]):
            if p1 == p2:
                skipped += 1
                continue
            if not is_lit(bearing_deg(p1, p2), azimuth_deg, tolerance_deg):
                continue
            quad = lit_quad(p1, p2, road_width_m)
            if quad is None:
                skipped += 1
                continue
            quads.append(quad)

    if skipped:
        logger.debug("Skipped %d degenerate road pieces", skipped)
    logger.debug("%d lit quads at sun-facing azimuth %.1f", len(quads), azimuth_deg)
    return quads


def lit_length_m(quads):
    """Total centerline length covered by ``quads``, meters."""
    total = 0.0
    for q in quads:
        a, b, c, d = q.corners
        # Centerline endpoints are the midpoints of the short sides
        p1 = GeoPoint((a.latitude + d.latitude) / 2, (a.longitude + d.longitude) / 2)
        p2 = GeoPoint((b.latitude + c.latitude) / 2, (b.longitude + c.longitude) / 2)
        total += segment_length_m(p1, p2)
    return total
