"""Map marker placement for a rendered route.

These are display heuristics layered on the analyzed track; the analyzer
itself never treats loops specially.
"""

from geopy.distance import geodesic

from gpx_track_analyzer.models import GPXData, RouteMarkers, TrackPoint

# Start and finish closer than this are labeled as a loop
DEFAULT_LOOP_TOLERANCE_M = 50.0

# Short tracks get no peak marker; it would sit on top of start/finish
MIN_POINTS_FOR_PEAK = 10


def is_loop(data: GPXData, tolerance_m: float = DEFAULT_LOOP_TOLERANCE_M) -> bool:
    """True if the track ends within tolerance_m of where it started."""
    if len(data.points) < 2:
        return False
    start, finish = data.points[0], data.points[-1]
    return geodesic((start.lat, start.lon), (finish.lat, finish.lon)).meters <= tolerance_m


def highest_point(data: GPXData) -> TrackPoint | None:
    """First point at the maximum elevation, or None without elevation data."""
    peak = None
    for pt in data.points:
        if pt.elevation is not None and (peak is None or pt.elevation > peak.elevation):
            peak = pt
    return peak


def route_markers(data: GPXData, loop_tolerance_m: float = DEFAULT_LOOP_TOLERANCE_M) -> RouteMarkers:
    peak = highest_point(data) if len(data.points) > MIN_POINTS_FOR_PEAK else None
    return RouteMarkers(
        start=data.points[0],
        finish=data.points[-1],
        peak=peak,
        is_loop=is_loop(data, loop_tolerance_m),
    )
