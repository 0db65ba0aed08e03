from bisect import bisect_left, bisect_right
from dataclasses import replace

from gpx_track_analyzer.distance import cumulative_distances
from gpx_track_analyzer.models import TrackPoint
from gpx_track_analyzer.units import METERS_PER_MILE


def _fit_elevation_at(distances: list[float], elevations: list[float], at_mile: float) -> float:
    """Least-squares line through (mile, meters) pairs, evaluated at at_mile."""
    n = len(distances)
    mean_d = sum(distances) / n
    mean_e = sum(elevations) / n
    spread = 0.0
    covariance = 0.0
    for d, e in zip(distances, elevations):
        spread += (d - mean_d) ** 2
        covariance += (d - mean_d) * (e - mean_e)
    # Single point or stacked duplicates: no slope to fit
    if spread == 0:
        return mean_e
    return mean_e + covariance / spread * (at_mile - mean_d)


def smooth_elevations(points: list[TrackPoint], radius_m: float = 50.0) -> list[TrackPoint]:
    """Replace each elevation with a line fitted to its neighbours along the track.

    Neighbours are the points within radius_m of track distance that have an
    elevation. Points without elevation pass through untouched, as does
    everything except elevation on the rest. A radius of zero or less returns
    the points as given.
    """
    if len(points) < 2 or radius_m <= 0:
        return list(points)

    # Cumulative distances are in miles, elevations stay in meters
    radius = radius_m / METERS_PER_MILE
    cum_dist = cumulative_distances(points)

    has_elev = [i for i in range(len(points)) if points[i].elevation is not None]
    elev_dists = [cum_dist[i] for i in has_elev]
    elev_values = [points[i].elevation for i in has_elev]

    smoothed = []
    for i, pt in enumerate(points):
        if pt.elevation is None:
            smoothed.append(pt)
            continue

        d = cum_dist[i]
        lo = bisect_left(elev_dists, d - radius)
        hi = bisect_right(elev_dists, d + radius)
        smoothed_elev = _fit_elevation_at(elev_dists[lo:hi], elev_values[lo:hi], d)
        smoothed.append(replace(pt, elevation=smoothed_elev))

    return smoothed
