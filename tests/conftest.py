import os
from datetime import datetime, timedelta, timezone

import pytest

from gpx_track_analyzer.models import TrackPoint

SAMPLE_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "functional", "data", "sample_hike.gpx"
)


def build_gpx(segments, name=None):
    """Build GPX 1.1 text from a list of segments of (lat, lon, ele) tuples.

    ele may be None to omit the <ele> element.
    """
    trkpts = []
    for segment in segments:
        rows = []
        for lat, lon, ele in segment:
            ele_xml = f"<ele>{ele}</ele>" if ele is not None else ""
            rows.append(f'<trkpt lat="{lat}" lon="{lon}">{ele_xml}</trkpt>')
        trkpts.append("<trkseg>" + "".join(rows) + "</trkseg>")
    name_xml = f"<name>{name}</name>" if name else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
        f"<trk>{name_xml}{''.join(trkpts)}</trk></gpx>"
    )


@pytest.fixture
def gpx_builder():
    return build_gpx


@pytest.fixture
def sample_gpx_path():
    return SAMPLE_GPX_PATH


@pytest.fixture
def three_point_gpx():
    """Three points ~111 m apart heading north: up 10 m, then down 5 m."""
    return build_gpx([[
        (40.0000, -105.0000, 3000),
        (40.0010, -105.0000, 3010),
        (40.0020, -105.0000, 3005),
    ]])


@pytest.fixture
def simple_track_points():
    """A short list of flat track points, ~111 m apart."""
    base_time = datetime(2024, 6, 15, 8, 0, 0, tzinfo=timezone.utc)
    return [
        TrackPoint(lat=40.0000, lon=-105.0, elevation=1000.0, time=base_time),
        TrackPoint(lat=40.0010, lon=-105.0, elevation=1000.0, time=base_time + timedelta(seconds=60)),
        TrackPoint(lat=40.0020, lon=-105.0, elevation=1000.0, time=base_time + timedelta(seconds=120)),
    ]


@pytest.fixture
def uphill_track_points():
    """Track points going uphill."""
    return [
        TrackPoint(lat=40.0000, lon=-105.0, elevation=10.0, time=None),
        TrackPoint(lat=40.0010, lon=-105.0, elevation=20.0, time=None),
        TrackPoint(lat=40.0020, lon=-105.0, elevation=35.0, time=None),
    ]


@pytest.fixture
def downhill_track_points():
    """Track points going downhill."""
    return [
        TrackPoint(lat=40.0000, lon=-105.0, elevation=50.0, time=None),
        TrackPoint(lat=40.0010, lon=-105.0, elevation=30.0, time=None),
        TrackPoint(lat=40.0020, lon=-105.0, elevation=10.0, time=None),
    ]
