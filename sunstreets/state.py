"""
Application state and the two input events.

A location change refetches features and recomposes; an hour change only
recomposes with the cached features. Fetches are numbered so that only
the most recently started one can replace the cache, whatever order
they complete in. In-flight fetches are not cancelled; a superseded
result is simply dropped.
"""

import logging
import threading

from . import config
from .models import FeatureSet, GeoPoint
from .overpass import fetch_features
from .scene import compose_scene
from .solar import instant_for_hour

logger = logging.getLogger(__name__)


class AppState:
    """
    Owns the feature cache, the current location/hour and the last scene.

    Parameters
    ----------
    fetcher : callable
        ``(GeoPoint) -> FeatureSet``; may raise FeatureFetchError.
    composer : callable
        ``(location, hour, features, today=...) -> Scene``.
    surface : object, optional
        Anything with ``show_scene(scene)``; receives every new scene.
    today : date, optional
        Fixed calendar date, mainly for tests.
    """

    def __init__(self, fetcher=fetch_features, composer=compose_scene, surface=None,
                 today=None, location=None, hour=config.DEFAULT_HOUR):
        self._fetcher = fetcher
        self._composer = composer
        self._surface = surface
        self._today = today
        self._lock = threading.Lock()
        self._next_seq = 0
        self._accepted_seq = 0
        self._features = FeatureSet()
        self.location = location or GeoPoint(config.DEFAULT_LATITUDE, config.DEFAULT_LONGITUDE)
        self.hour = hour
        self.scene = None

    @property
    def features(self):
        """Current FeatureSet; a consistent snapshot, never half updated."""
        with self._lock:
            return self._features

    def begin_fetch(self):
        """Reserve the next fetch sequence number."""
        with self._lock:
            self._next_seq += 1
            return self._next_seq

    def accept(self, seq, features, location=None):
        """
        Install ``features`` if ``seq`` is newer than anything accepted so far.

        ``location``, when given, is stored in the same locked step so the
        cache never describes a different place than ``self.location``.
        Returns True when the cache was replaced.
        """
        with self._lock:
            if seq <= self._accepted_seq:
                logger.debug("Dropping stale fetch #%d (latest accepted #%d)",
                             seq, self._accepted_seq)
                return False
            self._accepted_seq = seq
            self._features = features
            if location is not None:
                self.location = location
            return True

    def recompute(self, location, hour):
        """Compose and publish a scene from the cached features."""
        scene = self._composer(location, hour, self.features, today=self._today)
        self.location = location
        self.hour = hour
        self.scene = scene
        if self._surface is not None:
            self._surface.show_scene(scene)
        return scene

    def on_location_change(self, location, hour=None):
        """
        Refetch around ``location`` and recompose.

        Returns the new Scene, or None if a newer fetch has already been
        accepted. An invalid hour is rejected before anything is fetched;
        fetch errors propagate to the caller.
        """
        hour = self.hour if hour is None else hour
        instant_for_hour(hour, self._today)
        seq = self.begin_fetch()
        logger.info("Fetch #%d for (%.5f, %.5f)", seq, location.latitude, location.longitude)
        features = self._fetcher(location)
        if not self.accept(seq, features, location):
            return None
        return self.recompute(location, hour)

    def on_hour_change(self, hour):
        """Recompose at ``hour`` without refetching."""
        return self.recompute(self.location, hour)
