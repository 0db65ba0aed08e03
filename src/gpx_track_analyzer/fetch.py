"""Retrieval of raw GPX content from a URL.

The downloaded bytes are kept unmodified so they can be offered back to the
user as a file download, even when analysis fails.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

import requests

from gpx_track_analyzer.config import DEFAULTS
from gpx_track_analyzer.errors import FetchError
from gpx_track_analyzer.models import GPXData
from gpx_track_analyzer.parser import parse_track

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


@dataclass(frozen=True)
class TrackDownload:
    url: str
    content: bytes
    filename: str | None  # original filename from the URL path, if any


def is_url(path: str) -> bool:
    """Check if the given path is an http(s) URL rather than a local file."""
    return bool(URL_PATTERN.match(path))


def filename_from_url(url: str) -> str | None:
    name = PurePosixPath(unquote(urlparse(url).path)).name
    return name or None


def download_filename(route_name: str, original_filename: str | None = None) -> str:
    """Name offered for the GPX download.

    The original filename wins; otherwise the route name with whitespace
    runs replaced by dashes.
    """
    if original_filename:
        return original_filename
    slug = re.sub(r"\s+", "-", route_name.strip()) or "route"
    return f"{slug}.gpx"


def fetch_track(url: str, timeout: float | None = None) -> TrackDownload:
    """Download raw GPX content.

    Raises:
        FetchError: If the request fails or returns a non-2xx status.
    """
    if timeout is None:
        timeout = DEFAULTS["fetch_timeout"]
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch GPX from {url}: {e}") from e

    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return TrackDownload(url=url, content=response.content, filename=filename_from_url(url))


def fetch_and_parse(url: str, timeout: float | None = None) -> tuple[GPXData, TrackDownload]:
    """Fetch a GPX file and analyze it.

    Raises:
        FetchError: If the download fails.
        MalformedTrackError, InvalidCoordinateError: If the content cannot be analyzed.
    """
    download = fetch_track(url, timeout)
    return parse_track(download.content), download
