"""Elevation profile entries and chart/map index mapping."""

import math
from bisect import bisect_left

from gpx_track_analyzer.formatters import format_distance_label
from gpx_track_analyzer.models import ElevationProfilePoint, GPXData, TrackPoint
from gpx_track_analyzer.units import meters_to_feet, miles_to_km

# Display sampling interval used by the elevation chart
DEFAULT_SAMPLE_INTERVAL_MILES = 0.1


def make_profile_point(point: TrackPoint, index: int) -> ElevationProfilePoint:
    """Build the profile entry for a track point that has its cumulative distance."""
    distance = point.cumulative_distance
    distance_km = miles_to_km(distance)
    return ElevationProfilePoint(
        distance=distance,
        elevation=meters_to_feet(point.elevation),
        distance_label=format_distance_label(distance, "mi"),
        distance_km=distance_km,
        # Keep the recorded meters rather than a feet round trip
        elevation_m=point.elevation,
        distance_label_km=format_distance_label(distance_km, "km"),
        point_index=index,
    )


def build_elevation_profile(points: list[TrackPoint]) -> list[ElevationProfilePoint]:
    """One profile entry per point, in track order."""
    return [make_profile_point(pt, i) for i, pt in enumerate(points)]


def sample_profile(
    profile: list[ElevationProfilePoint] | tuple[ElevationProfilePoint, ...],
    interval_miles: float = DEFAULT_SAMPLE_INTERVAL_MILES,
) -> list[ElevationProfilePoint]:
    """Thin a profile for display density.

    Keeps the first entry at or past each interval boundary, skipping entries
    without elevation, and always keeps the final entry that has elevation.
    The analyzer never calls this; it is for chart rendering only.

    Raises:
        ValueError: If interval_miles is NaN or infinite.
    """
    if not math.isfinite(interval_miles):
        raise ValueError(f"Sampling interval must be finite, got {interval_miles}")
    if interval_miles <= 0:
        return [entry for entry in profile if entry.elevation is not None]

    sampled: list[ElevationProfilePoint] = []
    next_sample = 0.0
    for entry in profile:
        if entry.elevation is None:
            continue
        if entry.distance >= next_sample:
            sampled.append(entry)
            # First boundary strictly past this entry
            steps = entry.distance / interval_miles
            next_sample = (math.floor(steps) + 1) * interval_miles if math.isfinite(steps) else entry.distance
            if next_sample <= entry.distance:
                next_sample = math.nextafter(entry.distance, math.inf)

    last = next((entry for entry in reversed(profile) if entry.elevation is not None), None)
    if last is not None and (not sampled or sampled[-1] is not last):
        sampled.append(last)
    return sampled


def closest_point_index(data: GPXData, distance: float) -> int:
    """Index of the track point whose cumulative distance is closest to distance.

    Cumulative distances are non-decreasing, so a binary search suffices.
    Used to map a hovered chart position onto the route polyline.
    """
    distances = [pt.cumulative_distance for pt in data.points]
    i = bisect_left(distances, distance)
    if i <= 0:
        return 0
    if i >= len(distances):
        return len(distances) - 1
    if distances[i] - distance < distance - distances[i - 1]:
        return i
    return i - 1
