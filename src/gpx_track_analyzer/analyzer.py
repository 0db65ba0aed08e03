from dataclasses import replace

from gpx_track_analyzer.distance import haversine_miles
from gpx_track_analyzer.errors import MalformedTrackError
from gpx_track_analyzer.models import GPXData, TrackPoint
from gpx_track_analyzer.profile import make_profile_point
from gpx_track_analyzer.units import meters_to_feet

DEFAULT_TRACK_NAME = "Unnamed Track"


def calculate_elevation_gain(points: list[TrackPoint]) -> float:
    """Sum of positive elevation deltas in meters.

    Pairs where either elevation is unknown are skipped rather than treated
    as zero.
    """
    gain = 0.0
    for i in range(1, len(points)):
        prev = points[i - 1].elevation
        curr = points[i].elevation
        if prev is not None and curr is not None and curr > prev:
            gain += curr - prev
    return gain


def elevation_bounds(points: list[TrackPoint]) -> tuple[float, float] | None:
    """(min, max) elevation in meters, or None if no point has elevation."""
    elevations = [pt.elevation for pt in points if pt.elevation is not None]
    if not elevations:
        return None
    return min(elevations), max(elevations)


def analyze_points(points: list[TrackPoint], name: str = DEFAULT_TRACK_NAME) -> GPXData:
    """Compute cumulative distance, gain, extremes and profile in one pass.

    Incoming cumulative_distance values are ignored and recomputed from the
    coordinates.

    Raises:
        MalformedTrackError: If points is empty.
    """
    if not points:
        raise MalformedTrackError("Track contains no points")

    analyzed: list[TrackPoint] = []
    profile = []
    cumulative = 0.0
    gain_m = 0.0
    min_m: float | None = None
    max_m: float | None = None
    prev: TrackPoint | None = None

    for i, pt in enumerate(points):
        if prev is not None:
            cumulative += haversine_miles(prev.lat, prev.lon, pt.lat, pt.lon)
            if prev.elevation is not None and pt.elevation is not None:
                delta = pt.elevation - prev.elevation
                if delta > 0:
                    gain_m += delta

        if pt.elevation is not None:
            if min_m is None or pt.elevation < min_m:
                min_m = pt.elevation
            if max_m is None or pt.elevation > max_m:
                max_m = pt.elevation

        point = replace(pt, cumulative_distance=cumulative)
        analyzed.append(point)
        profile.append(make_profile_point(point, i))
        prev = pt

    return GPXData(
        points=tuple(analyzed),
        elevation_profile=tuple(profile),
        total_distance=cumulative,
        total_elevation_gain=meters_to_feet(gain_m),
        max_elevation=meters_to_feet(max_m),
        min_elevation=meters_to_feet(min_m),
        name=name or DEFAULT_TRACK_NAME,
    )
