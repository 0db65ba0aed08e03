"""Imperial/metric unit conversion.

All conversions use fixed factors so that converting there and back
reproduces the input within floating-point tolerance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gpx_track_analyzer.formatters import format_distance_label

if TYPE_CHECKING:
    from gpx_track_analyzer.models import ElevationProfilePoint

KM_PER_MILE = 1.60934
METERS_PER_FOOT = 0.3048
METERS_PER_MILE = KM_PER_MILE * 1000


@dataclass(frozen=True)
class MetricValues:
    distance_km: float
    elevation_m: float | None
    distance_label_km: str


@dataclass(frozen=True)
class ImperialValues:
    distance: float  # miles
    elevation: float | None  # feet
    distance_label: str


def miles_to_km(miles: float) -> float:
    return miles * KM_PER_MILE


def km_to_miles(km: float) -> float:
    return km / KM_PER_MILE


def feet_to_meters(feet: float | None) -> float | None:
    if feet is None:
        return None
    return feet * METERS_PER_FOOT


def meters_to_feet(meters: float | None) -> float | None:
    if meters is None:
        return None
    return meters / METERS_PER_FOOT


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def to_metric(profile_point: ElevationProfilePoint) -> MetricValues:
    """Metric duals of an imperial profile entry."""
    distance_km = miles_to_km(profile_point.distance)
    return MetricValues(
        distance_km=distance_km,
        elevation_m=feet_to_meters(profile_point.elevation),
        distance_label_km=format_distance_label(distance_km, "km"),
    )


def to_imperial(distance_km: float, elevation_m: float | None) -> ImperialValues:
    """Inverse of to_metric."""
    distance = km_to_miles(distance_km)
    return ImperialValues(
        distance=distance,
        elevation=meters_to_feet(elevation_m),
        distance_label=format_distance_label(distance, "mi"),
    )
