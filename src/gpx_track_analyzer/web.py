"""Flask endpoints feeding the route chart, route map and GPX download."""

import io
import logging
import math
import os

from flask import Flask, jsonify, request, send_file, url_for

from gpx_track_analyzer.analyzer import analyze_points
from gpx_track_analyzer.cache import TrackCache
from gpx_track_analyzer.charts import generate_elevation_chart, generate_placeholder_chart
from gpx_track_analyzer.config import get_setting, load_config
from gpx_track_analyzer.errors import FetchError, TrackError
from gpx_track_analyzer.fetch import TrackDownload, download_filename, fetch_track
from gpx_track_analyzer.markers import route_markers
from gpx_track_analyzer.models import GPXData, TrackPoint
from gpx_track_analyzer.parser import parse_track
from gpx_track_analyzer.profile import sample_profile
from gpx_track_analyzer.smoothing import smooth_elevations

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Failed to load route data. You can still download the GPX file below."

_config = load_config()

app = Flask(__name__)

# Raw downloads and analyzed tracks are cached separately so a file that
# fails analysis can still be served for download without refetching.
_download_cache = TrackCache(
    max_size=get_setting("cache_size", _config),
    ttl_seconds=get_setting("cache_ttl", _config),
)
_track_cache = TrackCache(
    max_size=get_setting("cache_size", _config),
    ttl_seconds=get_setting("cache_ttl", _config),
)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.lower() in ("1", "true", "yes", "on")


def _get_download(url: str) -> TrackDownload:
    download = _download_cache.get(url)
    if download is None:
        download = fetch_track(url, get_setting("fetch_timeout", _config))
        _download_cache.set(url, download)
    return download


def _get_track(url: str, smoothing: float) -> tuple[GPXData, TrackDownload]:
    download = _get_download(url)
    key = f"{url}|{smoothing}"
    data = _track_cache.get(key)
    if data is None:
        data = parse_track(download.content)
        if smoothing > 0:
            data = analyze_points(smooth_elevations(list(data.points), smoothing), data.name)
        _track_cache.set(key, data)
    return data, download


def _point_dict(pt: TrackPoint | None) -> dict | None:
    if pt is None:
        return None
    return {"lat": pt.lat, "lon": pt.lon, "elevation": pt.elevation, "distance": pt.cumulative_distance}


@app.route("/api/track")
def track_data():
    """Analyzed track as JSON for the chart and map components."""
    url = request.args.get("url", "")
    if not url:
        return jsonify({"error": "Missing url parameter"}), 400

    metric = _parse_bool(request.args.get("metric"), get_setting("metric", _config))
    try:
        smoothing = float(request.args.get("smoothing", get_setting("smoothing", _config)))
        interval = float(request.args.get("interval", get_setting("profile_interval", _config)))
    except ValueError:
        return jsonify({"error": "smoothing and interval must be numbers"}), 400
    if not (math.isfinite(smoothing) and smoothing >= 0):
        return jsonify({"error": "smoothing must be a finite, non-negative number"}), 400
    if not (math.isfinite(interval) and interval > 0):
        return jsonify({"error": "interval must be a finite, positive number"}), 400

    try:
        data, download = _get_track(url, smoothing)
    except FetchError as e:
        logger.warning("Fetch failed for %s: %s", url, e)
        return jsonify({"error": str(e)}), 502
    except TrackError as e:
        logger.warning("Could not analyze %s: %s", url, e)
        return jsonify({
            "error": FALLBACK_MESSAGE,
            "detail": str(e),
            "downloadUrl": url_for("download", url=url),
        }), 422

    markers = route_markers(data, get_setting("loop_tolerance_m", _config))
    payload = data.to_dict(metric=metric)
    payload["chartProfile"] = [entry.to_dict() for entry in sample_profile(data.elevation_profile, interval)]
    payload["markers"] = {
        "start": _point_dict(markers.start),
        "finish": _point_dict(markers.finish),
        "peak": _point_dict(markers.peak),
        "isLoop": markers.is_loop,
    }
    payload["downloadUrl"] = url_for("download", url=url)
    payload["downloadFilename"] = download_filename(data.name, download.filename)
    return jsonify(payload)


@app.route("/elevation-profile")
def elevation_profile():
    """Serve elevation profile image for a track."""
    url = request.args.get("url", "")
    imperial = _parse_bool(request.args.get("imperial"), not get_setting("metric", _config))
    aspect_param = request.args.get("aspect", "")
    try:
        aspect_ratio = max(0.5, min(4.0, float(aspect_param))) if aspect_param else 3.5
    except ValueError:
        aspect_ratio = 3.5

    if not url:
        img = generate_placeholder_chart("No route selected", aspect_ratio)
    else:
        try:
            data, _ = _get_track(url, get_setting("smoothing", _config))
        except TrackError as e:
            logger.warning("Elevation profile unavailable for %s: %s", url, e)
            img = generate_placeholder_chart("Route data unavailable", aspect_ratio)
        else:
            img = generate_elevation_chart(
                data,
                imperial=imperial,
                interval_miles=get_setting("profile_interval", _config),
                aspect_ratio=aspect_ratio,
            )
    return send_file(io.BytesIO(img), mimetype="image/png")


@app.route("/download")
def download():
    """Pass the original GPX bytes through unchanged."""
    url = request.args.get("url", "")
    if not url:
        return jsonify({"error": "Missing url parameter"}), 400
    try:
        track = _get_download(url)
    except FetchError as e:
        logger.warning("Download failed for %s: %s", url, e)
        return jsonify({"error": str(e)}), 502

    name = request.args.get("name", "")
    filename = download_filename(name or "route", None if name else track.filename)
    return send_file(
        io.BytesIO(track.content),
        mimetype="application/gpx+xml",
        as_attachment=True,
        download_name=filename,
    )


@app.route("/cache-stats")
def cache_stats():
    return jsonify({
        "downloads": _download_cache.stats(),
        "tracks": _track_cache.stats(),
    })


@app.route("/cache-clear", methods=["GET", "POST"])
def cache_clear():
    """Clear the download and analyzed track caches."""
    downloads_cleared = _download_cache.clear()
    tracks_cleared = _track_cache.clear()
    return {
        "status": "ok",
        "message": f"Caches cleared: downloads ({downloads_cleared}), tracks ({tracks_cleared})",
    }


def main():
    """Run the web server."""
    port = int(os.environ.get("PORT", 5050))
    print(f"Open http://localhost:{port} in your browser")
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
