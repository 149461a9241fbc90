"""
Render surface: scene -> styled polygons -> folium (Leaflet) map.

Every ``show`` replaces the previously displayed layer group as a whole;
nothing is patched in place.
"""

import json
import logging
from dataclasses import dataclass

import folium
from shapely.geometry import Polygon, mapping

from . import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderPolygon:
    """Filled polygon in (lat, lon) order with Leaflet path options."""

    locations: tuple
    kind: str
    color: str
    fill_color: str
    fill_opacity: float
    weight: float


def _styled(locations, kind, style):
    return RenderPolygon(locations=tuple(locations), kind=kind, **style)


def scene_to_polygons(scene, show_shadows=config.SHOW_SHADOWS):
    """
    Polygons to draw for ``scene``: buildings, then shadows if enabled,
    then lit street quads on top.
    """
    polys = []
    for b in scene.buildings:
        polys.append(_styled([p.as_latlon() for p in b.points], 'building',
                             config.BUILDING_STYLE))
    if show_shadows:
        for s in scene.shadow_polygons:
            polys.append(_styled([(lat, lon) for lon, lat in s.exterior.coords], 'shadow',
                                 config.SHADOW_STYLE))
    for q in scene.lit_quads:
        polys.append(_styled([p.as_latlon() for p in q.corners], q.kind, config.LIT_STYLE))
    return polys


def scene_to_geojson(scene, show_shadows=config.SHOW_SHADOWS):
    """GeoJSON FeatureCollection (as a dict) of the scene's polygons."""
    features = []
    for rp in scene_to_polygons(scene, show_shadows):
        ring = [(lon, lat) for lat, lon in rp.locations]
        features.append({
            'type': 'Feature',
            'properties': {
                'kind': rp.kind,
                'fill': rp.fill_color,
                'fill-opacity': rp.fill_opacity,
            },
            'geometry': mapping(Polygon(ring)),
        })
    return {
        'type': 'FeatureCollection',
        'properties': {
            'hour': scene.hour,
            'instant': scene.instant.isoformat(),
            'latitude': scene.location.latitude,
            'longitude': scene.location.longitude,
        },
        'features': features,
    }


def build_map(location, zoom=config.MAP_ZOOM):
    """Base map with the minimalist Carto light tiles."""
    m = folium.Map(location=list(location.as_latlon()), zoom_start=zoom,
                   tiles=None, max_zoom=19)
    folium.TileLayer(
        tiles=config.TILES_URL,
        attr=config.TILES_ATTRIBUTION,
        name='Carto light',
        subdomains='abcd',
        max_zoom=19,
    ).add_to(m)
    return m


class FoliumRenderSurface:
    """
    Displays scenes on a folium map, one layer group at a time.

    ``show_shadows`` toggles the building shadow outlines; off by default.
    """

    def __init__(self, fmap, show_shadows=config.SHOW_SHADOWS):
        self.map = fmap
        self.show_shadows = show_shadows
        self._layer = None

    @property
    def layer(self):
        return self._layer

    def clear(self):
        if self._layer is not None:
            # folium has no public API for detaching a child element
            self.map._children.pop(self._layer.get_name(), None)
            self._layer = None

    def show(self, polygons, name='Sunlit streets'):
        """Replace whatever is displayed with ``polygons``."""
        self.clear()
        layer = folium.FeatureGroup(name=name)
        for rp in polygons:
            folium.Polygon(
                locations=[list(p) for p in rp.locations],
                color=rp.color,
                fill=True,
                fill_color=rp.fill_color,
                fill_opacity=rp.fill_opacity,
                weight=rp.weight,
            ).add_to(layer)
        layer.add_to(self.map)
        self._layer = layer
        logger.debug("Displayed %d polygons", len(polygons))
        return layer

    def show_scene(self, scene):
        return self.show(scene_to_polygons(scene, self.show_shadows),
                         name=f"Sunlit streets {scene.hour:02d}:00 UTC")

    def save(self, path):
        self.map.save(path)
        logger.info("Map saved: %s", path)


def write_geojson(scene, path, show_shadows=config.SHOW_SHADOWS):
    with open(path, 'w') as f:
        json.dump(scene_to_geojson(scene, show_shadows), f)
