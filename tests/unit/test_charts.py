from gpx_track_analyzer.analyzer import analyze_points
from gpx_track_analyzer.charts import generate_elevation_chart, generate_placeholder_chart
from gpx_track_analyzer.models import TrackPoint
from gpx_track_analyzer.parser import parse_gpx

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestGenerateElevationChart:
    def test_imperial_png(self, sample_gpx_path):
        img = generate_elevation_chart(parse_gpx(sample_gpx_path))
        assert img.startswith(PNG_SIGNATURE)

    def test_metric_png(self, sample_gpx_path):
        img = generate_elevation_chart(parse_gpx(sample_gpx_path), imperial=False, interval_miles=0)
        assert img.startswith(PNG_SIGNATURE)

    def test_single_point(self):
        data = analyze_points([TrackPoint(lat=40.0, lon=-105.0, elevation=1600.0, time=None)])
        assert generate_elevation_chart(data).startswith(PNG_SIGNATURE)

    def test_no_elevation_renders_placeholder(self):
        data = analyze_points([
            TrackPoint(lat=40.0, lon=-105.0, elevation=None, time=None),
            TrackPoint(lat=40.001, lon=-105.0, elevation=None, time=None),
        ])
        assert generate_elevation_chart(data).startswith(PNG_SIGNATURE)


class TestPlaceholderChart:
    def test_png(self):
        assert generate_placeholder_chart("No route selected").startswith(PNG_SIGNATURE)
