"""Fast great-circle distance calculations.

Haversine is ~10x faster than geopy.geodesic and accurate enough for hiking
and cycling tracks (< 0.5% error at typical distances), so it is used for the
per-segment accumulation over every point.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from gpx_track_analyzer.units import meters_to_miles

if TYPE_CHECKING:
    from gpx_track_analyzer.models import TrackPoint

# Earth's mean radius in meters
EARTH_RADIUS_M = 6_371_000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points using Haversine formula.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Clamp: rounding can push a a hair above 1 for antipodal points
    c = 2 * math.asin(math.sqrt(min(1.0, a)))

    return EARTH_RADIUS_M * c


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in miles."""
    return meters_to_miles(haversine_distance(lat1, lon1, lat2, lon2))


def cumulative_distances(points: list[TrackPoint]) -> list[float]:
    """Cumulative distance in miles at each point, starting at 0."""
    if not points:
        return []
    cum_dist = [0.0]
    for i in range(1, len(points)):
        d = haversine_miles(
            points[i - 1].lat, points[i - 1].lon,
            points[i].lat, points[i].lon,
        )
        cum_dist.append(cum_dist[-1] + d)
    return cum_dist
