"""
sunstreets - which streets get direct sun around a point, hour by hour.
"""

from .errors import FeatureFetchError, InvalidHourError, SunstreetsError
from .exposure import compute_lit_quads
from .models import (
    BuildingFootprint,
    FeatureSet,
    GeoPoint,
    LitQuad,
    RoadSegment,
    Scene,
    ShadowVector,
    SunPosition,
)
from .overpass import fetch_features
from .scene import compose_scene, hourly_profile
from .shadows import compute_shadow_vectors, estimate_height
from .solar import sun_position
from .state import AppState

__version__ = '0.1.0'

__all__ = [
    'AppState',
    'BuildingFootprint',
    'FeatureFetchError',
    'FeatureSet',
    'GeoPoint',
    'InvalidHourError',
    'LitQuad',
    'RoadSegment',
    'Scene',
    'ShadowVector',
    'SunPosition',
    'SunstreetsError',
    'compose_scene',
    'compute_lit_quads',
    'compute_shadow_vectors',
    'estimate_height',
    'fetch_features',
    'hourly_profile',
    'sun_position',
]
