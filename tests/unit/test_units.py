import pytest

from gpx_track_analyzer.models import ElevationProfilePoint
from gpx_track_analyzer.units import (
    KM_PER_MILE,
    METERS_PER_FOOT,
    feet_to_meters,
    km_to_miles,
    meters_to_feet,
    meters_to_miles,
    miles_to_km,
    to_imperial,
    to_metric,
)


def _profile_point(distance, elevation):
    return ElevationProfilePoint(
        distance=distance,
        elevation=elevation,
        distance_label=f"{distance:.1f} mi",
        distance_km=0.0,
        elevation_m=None,
        distance_label_km="",
    )


class TestConversionFactors:
    def test_factors(self):
        assert KM_PER_MILE == 1.60934
        assert METERS_PER_FOOT == 0.3048

    def test_miles_to_km(self):
        assert miles_to_km(1.0) == pytest.approx(1.60934)
        assert miles_to_km(0.0) == 0.0

    def test_feet_to_meters(self):
        assert feet_to_meters(1000.0) == pytest.approx(304.8)

    def test_meters_to_miles(self):
        assert meters_to_miles(1609.34) == pytest.approx(1.0)

    def test_none_elevation_passes_through(self):
        assert feet_to_meters(None) is None
        assert meters_to_feet(None) is None

    @pytest.mark.parametrize("miles", [0.0, 0.138, 1.0, 26.2, 12345.678])
    def test_distance_round_trip(self, miles):
        assert km_to_miles(miles_to_km(miles)) == pytest.approx(miles, abs=1e-6)

    @pytest.mark.parametrize("feet", [-282.0, 0.0, 14505.0])
    def test_elevation_round_trip(self, feet):
        assert meters_to_feet(feet_to_meters(feet)) == pytest.approx(feet, abs=1e-6)


class TestToMetric:
    def test_converts_profile_point(self):
        result = to_metric(_profile_point(2.3, 1000.0))
        assert result.distance_km == pytest.approx(2.3 * 1.60934)
        assert result.elevation_m == pytest.approx(304.8)
        assert result.distance_label_km == "3.7 km"

    def test_missing_elevation(self):
        result = to_metric(_profile_point(1.0, None))
        assert result.elevation_m is None
        assert result.distance_label_km == "1.6 km"

    def test_is_pure(self):
        point = _profile_point(4.2, 8000.0)
        assert to_metric(point) == to_metric(point)


class TestToImperial:
    def test_converts_metric_values(self):
        result = to_imperial(3.7, 304.8)
        assert result.distance == pytest.approx(3.7 / 1.60934)
        assert result.elevation == pytest.approx(1000.0)
        assert result.distance_label == "2.3 mi"

    def test_inverse_of_to_metric(self):
        metric = to_metric(_profile_point(7.25, 9876.5))
        back = to_imperial(metric.distance_km, metric.elevation_m)
        assert back.distance == pytest.approx(7.25, abs=1e-6)
        assert back.elevation == pytest.approx(9876.5, abs=1e-6)
