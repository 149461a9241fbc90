#!/usr/bin/env python3
"""
Sunlit Street Map
=================
Fetches streets and buildings around a point from OpenStreetMap, works out
which street segments face the sun at a given hour (today, UTC) and writes
an interactive Leaflet map with the lit stretches in gold.

Also prints the hour-by-hour lit street length for the same area.
"""

import logging
import os
import sys
import time

from sunstreets import AppState, FeatureFetchError, GeoPoint, hourly_profile
from sunstreets import config
from sunstreets.render import FoliumRenderSurface, build_map, write_geojson

# ── Configuration ──────────────────────────────────────────────────────
LATITUDE = config.DEFAULT_LATITUDE    # Paris, Hôtel de Ville
LONGITUDE = config.DEFAULT_LONGITUDE
HOUR_UTC = config.DEFAULT_HOUR
SHOW_SHADOWS = False

OUT_DIR = os.path.join(os.path.dirname(__file__), '..', 'output', 'sunlit_streets')


def main():
    t0 = time.time()
    logging.basicConfig(level=logging.INFO, format='  %(levelname)s %(name)s: %(message)s')
    os.makedirs(OUT_DIR, exist_ok=True)

    location = GeoPoint(LATITUDE, LONGITUDE)

    print("=" * 60)
    print("  SUNLIT STREET MAP")
    print(f"  Point: {LATITUDE:.4f}, {LONGITUDE:.4f}   Hour: {HOUR_UTC:02d}:00 UTC")
    print("=" * 60)

    fmap = build_map(location)
    surface = FoliumRenderSurface(fmap, show_shadows=SHOW_SHADOWS)
    state = AppState(surface=surface, location=location, hour=HOUR_UTC)

    # ── Step 1: Features + scene ──
    print("\n[1/3] Fetching OSM features and composing scene...")
    try:
        scene = state.on_location_change(location, HOUR_UTC)
    except FeatureFetchError as e:
        print(f"\n  ERROR: could not load map features: {e}", file=sys.stderr)
        return 1

    features = state.features
    print(f"  Roads:     {len(features.roads)}")
    print(f"  Buildings: {len(features.buildings)}")
    if not scene.is_daylight:
        print("  Sun is below the horizon at this hour - nothing is lit.")
    else:
        print(f"  Lit quads: {len(scene.lit_quads)}")

    # ── Step 2: Daily profile ──
    print("\n[2/3] Hour-by-hour lit street length...")
    profile = hourly_profile(location, features)
    daylight = profile[profile['altitude_deg'] > 0]
    print(f"  {'Hour':>6} {'Altitude':>10} {'Azimuth':>10} {'Quads':>7} {'Lit m':>9}")
    print("  " + "-" * 46)
    for hour, row in daylight.iterrows():
        print(f"  {hour:>4}:00 {row['altitude_deg']:>9.1f}° {row['azimuth_deg']:>9.1f}° "
              f"{int(row['lit_quads']):>7} {row['lit_length_m']:>9.1f}")
    if len(daylight):
        best = daylight['lit_length_m'].idxmax()
        print(f"\n  Most sunlit street length at {best:02d}:00 UTC "
              f"({daylight.loc[best, 'lit_length_m']:.0f} m)")

    # ── Step 3: Outputs ──
    print("\n[3/3] Writing outputs...")
    html_path = os.path.join(OUT_DIR, f'sunlit_streets_{HOUR_UTC:02d}.html')
    surface.save(html_path)
    geojson_path = os.path.join(OUT_DIR, f'sunlit_streets_{HOUR_UTC:02d}.geojson')
    write_geojson(scene, geojson_path, show_shadows=SHOW_SHADOWS)
    csv_path = os.path.join(OUT_DIR, 'hourly_profile.csv')
    profile.to_csv(csv_path)
    print(f"  Saved: {html_path}")
    print(f"  Saved: {geojson_path}")
    print(f"  Saved: {csv_path}")

    print(f"\n{'=' * 60}")
    print(f"  COMPLETE - Total time: {time.time() - t0:.1f}s")
    print(f"{'=' * 60}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
