"""Error types raised by sunstreets.

Degenerate geometry and a sun below the horizon are not errors; they
produce empty results. Only invalid inputs and feature-source failures
raise.
"""

from __future__ import annotations


class SunstreetsError(Exception):
    """Base class for all sunstreets errors."""

    pass


class InvalidHourError(SunstreetsError, ValueError):
    """Raised when an hour outside 0-23 (or not an integer) is requested.

    Attributes:
        hour: The rejected value.
    """

    def __init__(self, hour):
        self.hour = hour
        super().__init__(f"Hour must be an integer in 0-23, got {hour!r}")


class FeatureFetchError(SunstreetsError):
    """Raised when the feature source cannot deliver a usable response.

    Attributes:
        url: Endpoint that was queried.
        attempts: Number of attempts made before giving up.
        reason: Short description of the last failure.
    """

    def __init__(self, url: str, attempts: int, reason: str):
        self.url = url
        self.attempts = attempts
        self.reason = reason
        super().__init__(
            f"Feature fetch from {url} failed after {attempts} attempt(s): {reason}"
        )
