"""
Overpass API feature source: roads and buildings around a point.

One query returns both ``highway`` and ``building`` ways with inline
geometry; elements are then split into RoadSegment and BuildingFootprint.
"""

import logging
import time

import requests

from . import config
from .errors import FeatureFetchError
from .models import BuildingFootprint, FeatureSet, GeoPoint, RoadSegment

logger = logging.getLogger(__name__)


def build_query(lat, lon, radius_m=config.FETCH_RADIUS_M, timeout_s=config.QUERY_TIMEOUT_S):
    return f"""
[out:json][timeout:{timeout_s}];
(
  way(around:{radius_m},{lat},{lon})["highway"];
  way(around:{radius_m},{lat},{lon})["building"];
);
out geom tags;
"""


def _is_retryable(exc):
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code in config.RETRY_STATUS_CODES
    return False


def fetch_elements(lat, lon, radius_m=config.FETCH_RADIUS_M, url=config.OVERPASS_URL,
                   attempts=config.FETCH_ATTEMPTS, base_wait=config.FETCH_BASE_WAIT_S,
                   sleep=time.sleep):
    """
    Raw Overpass elements within ``radius_m`` of (lat, lon).

    Connection errors, timeouts, 429 and 5xx responses are retried with
    exponential backoff (``base_wait``, 2x, 4x ...). Anything else, or
    running out of attempts, raises FeatureFetchError.
    """
    query = build_query(lat, lon, radius_m)
    attempts = max(1, int(attempts))
    last_reason = 'no attempt made'

    for attempt in range(1, attempts + 1):
        try:
            resp = requests.post(
                url,
                data={'data': query},
                headers={'User-Agent': config.USER_AGENT},
                timeout=config.HTTP_TIMEOUT_S,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            last_reason = str(exc) or exc.__class__.__name__
            if not _is_retryable(exc):
                raise FeatureFetchError(url, attempt, last_reason) from exc
            if attempt < attempts:
                wait = base_wait * 2 ** (attempt - 1)
                logger.warning("Overpass attempt %d/%d failed (%s); retrying in %.1fs",
                               attempt, attempts, last_reason, wait)
                sleep(wait)
            continue

        try:
            data = resp.json()
        except ValueError as exc:
            raise FeatureFetchError(url, attempt, f"malformed JSON response: {exc}") from exc
        elements = data.get('elements') if isinstance(data, dict) else None
        if not isinstance(elements, list):
            raise FeatureFetchError(url, attempt, "response has no 'elements' list")

        logger.info("Overpass returned %d elements around (%.5f, %.5f)", len(elements), lat, lon)
        return elements

    raise FeatureFetchError(url, attempts, last_reason)


def _points(element):
    pts = []
    for node in element.get('geometry') or []:
        if not isinstance(node, dict):
            continue
        lat, lon = node.get('lat'), node.get('lon')
        if lat is None or lon is None:
            continue
        pts.append(GeoPoint(float(lat), float(lon)))
    return tuple(pts)


def classify_elements(elements, center=None):
    """
    Split Overpass elements into a FeatureSet.

    ``highway`` ways with at least 2 points become roads, ``building``
    ways with at least 3 points become footprints; a way carrying both
    tags lands in both sets. Everything else is dropped.
    """
    roads = []
    buildings = []
    for el in elements:
        tags = el.get('tags') or {}
        if not tags:
            continue
        points = _points(el)
        if 'highway' in tags:
            if len(points) >= 2:
                roads.append(RoadSegment(points=points, category=tags['highway'],
                                         tags=dict(tags), osm_id=el.get('id')))
        if 'building' in tags:
            if len(points) >= 3:
                buildings.append(BuildingFootprint(points=points, tags=dict(tags),
                                                   osm_id=el.get('id')))

    logger.info("Classified %d roads and %d buildings", len(roads), len(buildings))
    return FeatureSet(roads=tuple(roads), buildings=tuple(buildings), center=center)


def fetch_features(location, radius_m=config.FETCH_RADIUS_M, **kwargs):
    """Fetch and classify the features around a GeoPoint."""
    elements = fetch_elements(location.latitude, location.longitude, radius_m, **kwargs)
    return classify_elements(elements, center=location)
