"""Exception hierarchy for gpx-track-analyzer.

Callers can catch TrackError (broad) or a specific subclass (narrow).
"""


class TrackError(RuntimeError):
    """Base class for all track loading and analysis errors."""


class MalformedTrackError(TrackError):
    """Content is not valid GPX XML, or it contains no track points."""


class InvalidCoordinateError(TrackError):
    """A track point has a missing or out-of-range latitude/longitude."""


class FetchError(TrackError):
    """Retrieving the raw track content failed (network, HTTP status)."""
