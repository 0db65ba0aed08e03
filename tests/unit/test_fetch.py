from unittest.mock import MagicMock, patch

import pytest
import requests

from gpx_track_analyzer import fetch
from gpx_track_analyzer.errors import FetchError, MalformedTrackError
from gpx_track_analyzer.fetch import (
    TrackDownload,
    download_filename,
    fetch_and_parse,
    fetch_track,
    filename_from_url,
    is_url,
)

GPX_URL = "https://cdn.example.com/files/abc123/bear%20peak.gpx"


def _response(content=b"", status_code=200):
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


class TestIsUrl:
    def test_http_urls(self):
        assert is_url("https://example.com/route.gpx")
        assert is_url("HTTP://example.com/route.gpx")

    def test_local_paths(self):
        assert not is_url("/tmp/route.gpx")
        assert not is_url("route.gpx")
        assert not is_url("ftp://example.com/route.gpx")


class TestFilenames:
    def test_filename_from_url(self):
        assert filename_from_url(GPX_URL) == "bear peak.gpx"

    def test_filename_from_url_without_path(self):
        assert filename_from_url("https://example.com") is None

    def test_download_filename_prefers_original(self):
        assert download_filename("Bear Peak", "original.gpx") == "original.gpx"

    def test_download_filename_from_route_name(self):
        assert download_filename("Bear Peak  West Ridge") == "Bear-Peak-West-Ridge.gpx"

    def test_download_filename_empty_name(self):
        assert download_filename("   ") == "route.gpx"


class TestFetchTrack:
    @patch.object(fetch.requests, "get")
    def test_success(self, mock_get):
        mock_get.return_value = _response(b"<gpx/>")
        result = fetch_track(GPX_URL, timeout=5)
        assert result == TrackDownload(url=GPX_URL, content=b"<gpx/>", filename="bear peak.gpx")
        mock_get.assert_called_once_with(GPX_URL, timeout=5)

    @patch.object(fetch.requests, "get")
    def test_default_timeout(self, mock_get):
        mock_get.return_value = _response(b"<gpx/>")
        fetch_track(GPX_URL)
        assert mock_get.call_args.kwargs["timeout"] == 30.0

    @patch.object(fetch.requests, "get")
    def test_http_error(self, mock_get):
        mock_get.return_value = _response(status_code=404)
        with pytest.raises(FetchError):
            fetch_track(GPX_URL)

    @patch.object(fetch.requests, "get")
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(FetchError, match="unreachable"):
            fetch_track(GPX_URL)

    @patch.object(fetch.requests, "get")
    def test_no_retry(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        with pytest.raises(FetchError):
            fetch_track(GPX_URL)
        assert mock_get.call_count == 1


class TestFetchAndParse:
    @patch.object(fetch.requests, "get")
    def test_returns_data_and_original_bytes(self, mock_get, three_point_gpx):
        raw = three_point_gpx.encode("utf-8")
        mock_get.return_value = _response(raw)
        data, download = fetch_and_parse(GPX_URL)
        assert len(data.points) == 3
        assert download.content is raw

    @patch.object(fetch.requests, "get")
    def test_malformed_content(self, mock_get):
        mock_get.return_value = _response(b"<html>not found</html>")
        with pytest.raises(MalformedTrackError):
            fetch_and_parse(GPX_URL)
