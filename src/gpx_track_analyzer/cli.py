import argparse
import json
import logging
import sys

from gpx_track_analyzer import __version_date__, get_git_hash
from gpx_track_analyzer.analyzer import analyze_points
from gpx_track_analyzer.config import DEFAULTS, load_config
from gpx_track_analyzer.errors import FetchError, InvalidCoordinateError, MalformedTrackError
from gpx_track_analyzer.fetch import fetch_and_parse, is_url
from gpx_track_analyzer.formatters import format_distance_label, format_duration, format_elevation
from gpx_track_analyzer.markers import route_markers
from gpx_track_analyzer.models import GPXData
from gpx_track_analyzer.parser import parse_gpx
from gpx_track_analyzer.smoothing import smooth_elevations
from gpx_track_analyzer.units import feet_to_meters


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    def get_default(key: str):
        return config.get(key, DEFAULTS[key])

    parser = argparse.ArgumentParser(
        description="Analyze a GPX track: distance, elevation gain and elevation profile."
    )
    parser.add_argument("gpx_file", help="Path or http(s) URL of a GPX file")
    parser.add_argument(
        "--metric",
        action="store_true",
        default=get_default("metric"),
        help="Report kilometers and meters instead of miles and feet",
    )
    parser.add_argument(
        "--imperial",
        action="store_false",
        dest="metric",
        help="Report miles and feet even if metric output is configured",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full analysis (points and elevation profile) as JSON",
    )
    parser.add_argument(
        "--smoothing",
        type=float,
        default=get_default("smoothing"),
        help=f"Elevation smoothing radius in meters (default: {DEFAULTS['smoothing']}, disabled)",
    )
    parser.add_argument(
        "--no-smoothing",
        action="store_true",
        help="Disable elevation smoothing even if configured",
    )
    parser.add_argument(
        "--loop-tolerance",
        type=float,
        default=get_default("loop_tolerance_m"),
        help=f"Start/finish distance in meters that counts as a loop (default: {DEFAULTS['loop_tolerance_m']})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=get_default("fetch_timeout"),
        help=f"HTTP timeout in seconds for URLs (default: {DEFAULTS['fetch_timeout']})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version_date__} ({get_git_hash()})",
    )
    return parser


def format_summary(data: GPXData, metric: bool, loop_tolerance_m: float) -> str:
    markers = route_markers(data, loop_tolerance_m)
    if metric:
        distance = format_distance_label(data.total_distance_km, "km")
        gain = format_elevation(data.total_elevation_gain_m, "m")
        max_elev = format_elevation(feet_to_meters(data.max_elevation), "m")
        min_elev = format_elevation(feet_to_meters(data.min_elevation), "m")
    else:
        distance = format_distance_label(data.total_distance, "mi")
        gain = format_elevation(data.total_elevation_gain, "ft")
        max_elev = format_elevation(data.max_elevation, "ft")
        min_elev = format_elevation(data.min_elevation, "ft")

    lines = [
        "=== GPX Track Analysis ===",
        f"Track:          {data.name}",
        f"Points:         {len(data.points)}",
        f"Distance:       {distance}",
        f"Elevation Gain: {gain}",
        f"Max Elevation:  {max_elev}",
        f"Min Elevation:  {min_elev}",
        f"Duration:       {format_duration(data.duration)}",
        f"Loop:           {'yes' if markers.is_loop else 'no'}",
    ]
    if not data.has_elevation:
        lines.append("Note: track has no elevation data")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if is_url(args.gpx_file):
            data, _ = fetch_and_parse(args.gpx_file, args.timeout)
        else:
            data = parse_gpx(args.gpx_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.gpx_file}", file=sys.stderr)
        sys.exit(1)
    except FetchError as e:
        print(f"Error downloading GPX: {e}", file=sys.stderr)
        sys.exit(1)
    except (MalformedTrackError, InvalidCoordinateError) as e:
        print(f"Error parsing GPX file: {e}", file=sys.stderr)
        sys.exit(1)

    smoothing_radius = 0.0 if args.no_smoothing else args.smoothing
    if smoothing_radius > 0:
        data = analyze_points(smooth_elevations(list(data.points), smoothing_radius), data.name)

    if args.json:
        print(json.dumps(data.to_dict(metric=args.metric), indent=2))
    else:
        print(format_summary(data, args.metric, args.loop_tolerance))
