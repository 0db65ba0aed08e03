"""GPX parsing into analyzed tracks.

Parsing is all-or-nothing: a single bad point fails the whole track, since
dropping it would silently shift every cumulative distance after it.
"""

import logging
import math
from xml.etree import ElementTree as ET

import gpxpy
import gpxpy.gpx

from gpx_track_analyzer.analyzer import DEFAULT_TRACK_NAME, analyze_points
from gpx_track_analyzer.errors import InvalidCoordinateError, MalformedTrackError
from gpx_track_analyzer.models import GPXData, TrackPoint

logger = logging.getLogger(__name__)


def _decode(raw_content: str | bytes) -> str:
    if isinstance(raw_content, str):
        return raw_content.strip()
    try:
        return raw_content.decode("utf-8-sig").strip()
    except UnicodeDecodeError as e:
        raise MalformedTrackError(f"GPX content is not valid UTF-8: {e}") from e


def _find_bad_coordinate(text: str) -> str | None:
    """Describe the first track point whose lat/lon attribute is missing or not a number.

    gpxpy reports these as generic parse errors, so the raw attributes are
    checked again to tell coordinate problems apart from other bad content.
    """
    try:
        root = ET.fromstring(text.encode("utf-8"))
    except ET.ParseError:
        return None
    trkpts = (el for el in root.iter() if el.tag == "trkpt" or el.tag.endswith("}trkpt"))
    for index, trkpt in enumerate(trkpts):
        for attr, field in (("lat", "latitude"), ("lon", "longitude")):
            value = trkpt.get(attr)
            if value is None:
                return f"Track point {index} is missing {field}"
            try:
                float(value)
            except ValueError:
                return f"Track point {index} has invalid {field} {value!r}"
    return None


def _validate_coordinates(index: int, lat: float | None, lon: float | None) -> None:
    if lat is None or lon is None:
        raise InvalidCoordinateError(f"Track point {index} is missing latitude or longitude")
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise InvalidCoordinateError(f"Track point {index} has invalid latitude {lat}")
    if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise InvalidCoordinateError(f"Track point {index} has invalid longitude {lon}")


def _track_name(gpx: gpxpy.gpx.GPX) -> str:
    for track in gpx.tracks:
        if track.name:
            return track.name.strip()
    if gpx.name:
        return gpx.name.strip()
    return DEFAULT_TRACK_NAME


def extract_points(gpx: gpxpy.gpx.GPX) -> list[TrackPoint]:
    """Concatenate the points of every segment of every track in document order."""
    points: list[TrackPoint] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for pt in segment.points:
                _validate_coordinates(len(points), pt.latitude, pt.longitude)
                if pt.elevation is not None and not math.isfinite(pt.elevation):
                    raise MalformedTrackError(f"Track point {len(points)} has invalid elevation {pt.elevation}")
                points.append(
                    TrackPoint(
                        lat=pt.latitude,
                        lon=pt.longitude,
                        elevation=pt.elevation,
                        time=pt.time,
                    )
                )
    return points


def parse_track(raw_content: str | bytes) -> GPXData:
    """Parse GPX content and return the analyzed track.

    Raises:
        MalformedTrackError: If the content is not valid GPX, has no track points
            or has a NaN or infinite elevation.
        InvalidCoordinateError: If any point has missing or out-of-range coordinates.
    """
    text = _decode(raw_content)
    try:
        gpx = gpxpy.parse(text)
    except gpxpy.gpx.GPXXMLSyntaxException as e:
        raise MalformedTrackError(f"GPX content is not valid XML: {e}") from e
    except gpxpy.gpx.GPXException as e:
        problem = _find_bad_coordinate(text)
        if problem is not None:
            raise InvalidCoordinateError(problem) from e
        raise MalformedTrackError(f"Error parsing GPX: {e}") from e

    points = extract_points(gpx)
    if not points:
        raise MalformedTrackError("GPX file contains no track points")

    logger.debug("Parsed %d track points from %d tracks", len(points), len(gpx.tracks))
    return analyze_points(points, _track_name(gpx))


def parse_gpx(filepath: str) -> GPXData:
    """Parse a GPX file from disk and return the analyzed track."""
    with open(filepath, "rb") as f:
        return parse_track(f.read())
