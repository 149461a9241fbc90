"""
Configuration for the sunlit street map.

All tunables live here as module constants; functions take them as
defaults so callers and tests can override per call.
"""

# ── Projection ────────────────────────────────────────────────────────
# Locally constant degree lengths (no cos(latitude) correction).
METERS_PER_DEG_LAT = 110540.0
METERS_PER_DEG_LON = 111320.0

# ── Street exposure ───────────────────────────────────────────────────
ROAD_WIDTH_M = 6.0          # half-width of a lit quad, meters
LIT_TOLERANCE_DEG = 20.0    # strict: circular distance must be < this
ACCEPTED_ROAD_CATEGORIES = frozenset({
    'primary', 'secondary', 'tertiary', 'residential',
})

# ── Building shadows ──────────────────────────────────────────────────
DEFAULT_BUILDING_HEIGHT_M = 10.0
METERS_PER_LEVEL = 3.0
MAX_SHADOW_LENGTH_M = 500.0  # clamp for rendered shadow polygons

# ── Feature source (Overpass) ─────────────────────────────────────────
OVERPASS_URL = 'https://overpass-api.de/api/interpreter'
FETCH_RADIUS_M = 300
QUERY_TIMEOUT_S = 25        # server-side [timeout:...]
HTTP_TIMEOUT_S = 60         # client-side read timeout
USER_AGENT = 'sunstreets/0.1'
FETCH_ATTEMPTS = 3
FETCH_BASE_WAIT_S = 1.0
RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

# ── Map / rendering ───────────────────────────────────────────────────
DEFAULT_LATITUDE = 48.8566   # Paris
DEFAULT_LONGITUDE = 2.3522
DEFAULT_HOUR = 12
MAP_ZOOM = 17
TILES_URL = 'https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png'
TILES_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OSM</a>'

SHOW_SHADOWS = False  # shadows are modeled but hidden unless toggled on

LIT_STYLE = {'color': 'none', 'fill_color': 'gold', 'fill_opacity': 0.7, 'weight': 0}
BUILDING_STYLE = {'color': '#555', 'fill_color': '#999', 'fill_opacity': 0.6, 'weight': 1}
SHADOW_STYLE = {'color': '#455a64', 'fill_color': '#263238', 'fill_opacity': 0.25, 'weight': 0.5}
