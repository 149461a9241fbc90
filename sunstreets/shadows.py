"""
Building shadow projection.

The shadow of a footprint is cast opposite the sun with length
height / tan(altitude). Vectors are always computed; the outline polygons
are only drawn when shadows are switched on in the render options.
"""

import logging
import math
import re

from shapely.affinity import translate
from shapely.geometry import Polygon

from . import config
from .geometry import meters_to_degrees, ring_coords
from .models import ShadowVector

logger = logging.getLogger(__name__)

_FLOAT_RE = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)')
_INT_RE = re.compile(r'^\s*([-+]?\d+)')


def _leading_number(value, pattern):
    if value is None:
        return None
    match = pattern.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def estimate_height(tags, default=config.DEFAULT_BUILDING_HEIGHT_M,
                    meters_per_level=config.METERS_PER_LEVEL):
    """
    Building height in meters from OSM tags.

    ``building:height`` wins (leading number, so "12 m" reads as 12), then
    ``building:levels`` x ``meters_per_level``, then ``default``. Values
    that are missing, unparseable or not positive fall through to the
    next rule.
    """
    tags = tags or {}

    height = _leading_number(tags.get('building:height'), _FLOAT_RE)
    if height is not None and math.isfinite(height) and height > 0:
        return height

    levels = _leading_number(tags.get('building:levels'), _INT_RE)
    if levels is not None and levels > 0:
        return levels * meters_per_level

    return default


def shadow_vector(height_m, sun):
    """Shadow of a ``height_m`` tall object; None with the sun down."""
    if sun.altitude <= 0:
        return None
    return ShadowVector(
        length_m=height_m / math.tan(sun.altitude),
        direction=sun.azimuth + math.pi,
        height_m=height_m,
    )


def shadow_offset_m(vector):
    """(dx east, dy north) displacement of ``vector`` in meters."""
    return (vector.length_m * math.sin(vector.direction),
            vector.length_m * math.cos(vector.direction))


def shadow_offset_degrees(vector):
    """(dlat, dlon) displacement of ``vector`` in degrees."""
    dx, dy = shadow_offset_m(vector)
    return meters_to_degrees(dx, dy)


def compute_shadow_vectors(buildings, sun):
    """
    One ShadowVector per valid footprint, in input order.

    Footprints with fewer than three points are skipped. Near the horizon
    lengths grow without bound; callers that draw must clamp.
    """
    if sun.altitude <= 0:
        return []

    vectors = []
    for b in buildings:
        if len(b.points) < 3:
            continue
        vectors.append(shadow_vector(estimate_height(b.tags), sun))
    return vectors


def project_shadow(footprint, vector, max_length_m=config.MAX_SHADOW_LENGTH_M):
    """
    Shadow outline of one footprint as a shapely Polygon in (lon, lat).

    The outline is the convex hull of the footprint and a copy translated
    along the shadow. Returns None for an invalid footprint, a non-finite
    length or a degenerate hull.
    """
    if not footprint.is_valid or not math.isfinite(vector.length_m):
        return None
    clamped = ShadowVector(length_m=min(vector.length_m, max_length_m),
                           direction=vector.direction, height_m=vector.height_m)
    dlat, dlon = shadow_offset_degrees(clamped)

    # Hull first so a self-intersecting OSM ring still unions cleanly
    base = Polygon(ring_coords(footprint.points)).convex_hull
    shadow_tip = translate(base, xoff=dlon, yoff=dlat)
    hull = base.union(shadow_tip).convex_hull
    if not isinstance(hull, Polygon) or hull.is_empty:
        return None
    return hull


def compute_shadow_polygons(buildings, sun, max_length_m=config.MAX_SHADOW_LENGTH_M):
    """Shadow outlines for all valid footprints; empty with the sun down."""
    if sun.altitude <= 0:
        return []

    polygons = []
    for b in buildings:
        if len(b.points) < 3:
            continue
        poly = project_shadow(b, shadow_vector(estimate_height(b.tags), sun), max_length_m)
        if poly is not None:
            polygons.append(poly)
    logger.debug("Projected %d building shadows", len(polygons))
    return polygons
