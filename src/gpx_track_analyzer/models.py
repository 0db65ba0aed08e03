from dataclasses import dataclass
from datetime import datetime, timedelta

from gpx_track_analyzer.units import feet_to_meters, miles_to_km


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    elevation: float | None  # meters; None when the file has no <ele>
    time: datetime | None
    cumulative_distance: float = 0.0  # miles from the first point


@dataclass(frozen=True)
class ElevationProfilePoint:
    distance: float  # miles, cumulative
    elevation: float | None  # feet
    distance_label: str
    distance_km: float
    elevation_m: float | None
    distance_label_km: str
    point_index: int = 0  # index into GPXData.points

    def to_dict(self) -> dict:
        return {
            "distance": self.distance,
            "elevation": self.elevation,
            "distanceLabel": self.distance_label,
            "distanceKm": self.distance_km,
            "elevationM": self.elevation_m,
            "distanceLabelKm": self.distance_label_km,
            "pointIndex": self.point_index,
        }


@dataclass(frozen=True)
class GPXData:
    """Analyzed track, ready for charting and mapping.

    Distances are in miles and elevations in feet, except for the raw
    TrackPoint.elevation values which stay in meters as recorded. Elevation
    extremes are None when no point carries elevation data.
    """

    points: tuple[TrackPoint, ...]
    elevation_profile: tuple[ElevationProfilePoint, ...]
    total_distance: float  # miles
    total_elevation_gain: float  # feet
    max_elevation: float | None  # feet
    min_elevation: float | None  # feet
    name: str = "Unnamed Track"

    @property
    def has_elevation(self) -> bool:
        return self.max_elevation is not None

    @property
    def total_distance_km(self) -> float:
        return miles_to_km(self.total_distance)

    @property
    def total_elevation_gain_m(self) -> float:
        return feet_to_meters(self.total_elevation_gain)

    @property
    def start_time(self) -> datetime | None:
        for pt in self.points:
            if pt.time is not None:
                return pt.time
        return None

    @property
    def end_time(self) -> datetime | None:
        for pt in reversed(self.points):
            if pt.time is not None:
                return pt.time
        return None

    @property
    def duration(self) -> timedelta | None:
        """Elapsed time between the first and last timestamps, if any."""
        start, end = self.start_time, self.end_time
        if start is None or end is None:
            return None
        return end - start

    def to_dict(self, metric: bool = False) -> dict:
        """Serialize for the chart and map components.

        The summary block is expressed in the requested unit system; the
        profile always carries both.
        """
        if metric:
            summary = {
                "units": "metric",
                "totalDistance": self.total_distance_km,
                "totalElevationGain": self.total_elevation_gain_m,
                "maxElevation": feet_to_meters(self.max_elevation),
                "minElevation": feet_to_meters(self.min_elevation),
            }
        else:
            summary = {
                "units": "imperial",
                "totalDistance": self.total_distance,
                "totalElevationGain": self.total_elevation_gain,
                "maxElevation": self.max_elevation,
                "minElevation": self.min_elevation,
            }
        duration = self.duration
        summary["durationSeconds"] = duration.total_seconds() if duration is not None else None
        return {
            "name": self.name,
            **summary,
            "points": [
                {
                    "lat": pt.lat,
                    "lon": pt.lon,
                    "elevation": pt.elevation,
                    "time": pt.time.isoformat() if pt.time is not None else None,
                    "distance": pt.cumulative_distance,
                }
                for pt in self.points
            ],
            "elevationProfile": [entry.to_dict() for entry in self.elevation_profile],
        }


@dataclass(frozen=True)
class RouteMarkers:
    start: TrackPoint
    finish: TrackPoint
    peak: TrackPoint | None  # highest point; None without elevation data
    is_loop: bool
