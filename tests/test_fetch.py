"""Tests for sumoparse.fetch."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from sumoparse.fetch import (
    fetch_page,
    fetch_with_cache,
    hoshitori_url,
    torikumi_url,
)
from sumoparse.models import Division
from sumoparse.util import FetchError


class TestUrlBuilders:
    def test_torikumi_url(self) -> None:
        assert torikumi_url(Division.MAKUUCHI, 3) == (
            "https://www.sumo.or.jp/ResultData/torikumi/1/3/"
        )

    def test_hoshitori_url(self) -> None:
        assert hoshitori_url(Division.SANDANME) == (
            "https://sumo.or.jp/ResultData/hoshitori/4/1/"
        )


class TestFetchPage:
    """Tests for fetch_page with mocked HTTP."""

    @patch("sumoparse.fetch.time.sleep")
    @patch("sumoparse.fetch.requests.get")
    def test_success_returns_html(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        mock_resp = MagicMock()
        mock_resp.status_code = 200
        mock_resp.text = "<html>OK</html>"
        mock_get.return_value = mock_resp

        assert fetch_page("https://example.com") == "<html>OK</html>"
        mock_get.assert_called_once()
        mock_sleep.assert_not_called()

    @patch("sumoparse.fetch.time.sleep")
    @patch("sumoparse.fetch.requests.get")
    def test_retries_on_500(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        fail_resp = MagicMock(status_code=500)
        ok_resp = MagicMock(status_code=200, text="<html>OK</html>")
        mock_get.side_effect = [fail_resp, ok_resp]

        assert fetch_page("https://example.com") == "<html>OK</html>"
        assert mock_get.call_count == 2
        mock_sleep.assert_called_once_with(1)

    @patch("sumoparse.fetch.time.sleep")
    @patch("sumoparse.fetch.requests.get")
    def test_raises_after_max_retries(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        mock_get.return_value = MagicMock(status_code=503)

        with pytest.raises(FetchError, match="HTTP 503"):
            fetch_page("https://example.com")
        assert mock_get.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    @patch("sumoparse.fetch.time.sleep")
    @patch("sumoparse.fetch.requests.get")
    def test_retries_on_connection_error(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        mock_get.side_effect = [
            requests.ConnectionError("timeout"),
            MagicMock(status_code=200, text="<html>OK</html>"),
        ]

        assert fetch_page("https://example.com") == "<html>OK</html>"
        assert mock_get.call_count == 2

    @patch("sumoparse.fetch.time.sleep")
    @patch("sumoparse.fetch.requests.get")
    def test_client_error_not_retried(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        mock_get.return_value = MagicMock(status_code=404)

        with pytest.raises(FetchError, match="HTTP 404"):
            fetch_page("https://example.com")
        mock_get.assert_called_once()
        mock_sleep.assert_not_called()

    @patch("sumoparse.fetch.time.sleep")
    @patch("sumoparse.fetch.requests.get")
    def test_rate_limit_is_retried(self, mock_get: MagicMock, mock_sleep: MagicMock) -> None:
        mock_get.side_effect = [
            MagicMock(status_code=429),
            MagicMock(status_code=200, text="<html>OK</html>"),
        ]

        assert fetch_page("https://example.com") == "<html>OK</html>"
        assert mock_get.call_count == 2


class TestDecode:
    @patch("sumoparse.fetch.requests.get")
    def test_missing_charset_uses_detected_encoding(self, mock_get: MagicMock) -> None:
        resp = MagicMock(status_code=200, encoding="ISO-8859-1", apparent_encoding="utf-8")
        mock_get.return_value = resp
        fetch_page("https://example.com")
        assert resp.encoding == "utf-8"

    @patch("sumoparse.fetch.requests.get")
    def test_declared_charset_kept(self, mock_get: MagicMock) -> None:
        resp = MagicMock(status_code=200, encoding="shift_jis", apparent_encoding="utf-8")
        mock_get.return_value = resp
        fetch_page("https://example.com")
        assert resp.encoding == "shift_jis"


class TestFetchWithCache:
    @patch("sumoparse.fetch.fetch_page")
    @patch("sumoparse.fetch._download_delay")
    def test_cache_hit_skips_fetch(
        self, mock_delay: MagicMock, mock_fetch: MagicMock, tmp_path: Path,
    ) -> None:
        cache_path = tmp_path / "cached.html"
        cache_path.write_text("<html>cached</html>", encoding="utf-8")

        result = fetch_with_cache("https://example.com", cache_path, use_cache=True)
        assert result == "<html>cached</html>"
        mock_fetch.assert_not_called()
        mock_delay.assert_not_called()

    @patch("sumoparse.fetch.fetch_page", return_value="<html>取組</html>")
    @patch("sumoparse.fetch._download_delay")
    def test_cache_miss_fetches_and_saves(
        self, mock_delay: MagicMock, mock_fetch: MagicMock, tmp_path: Path,
    ) -> None:
        cache_path = tmp_path / "sub" / "cached.html"

        result = fetch_with_cache("https://example.com", cache_path, use_cache=True)
        assert result == "<html>取組</html>"
        assert cache_path.read_text(encoding="utf-8") == "<html>取組</html>"
        mock_delay.assert_called_once()

    @patch("sumoparse.fetch.fetch_page", return_value="<html>fetched</html>")
    @patch("sumoparse.fetch._download_delay")
    def test_cache_off_does_not_read_or_save(
        self, mock_delay: MagicMock, mock_fetch: MagicMock, tmp_path: Path,
    ) -> None:
        cache_path = tmp_path / "cached.html"
        cache_path.write_text("<html>stale</html>", encoding="utf-8")

        result = fetch_with_cache("https://example.com", cache_path, use_cache=False)
        assert result == "<html>fetched</html>"
        assert cache_path.read_text(encoding="utf-8") == "<html>stale</html>"

    @patch("sumoparse.fetch.fetch_page", side_effect=FetchError("HTTP 500"))
    @patch("sumoparse.fetch._download_delay")
    def test_failed_fetch_leaves_no_cache(
        self, mock_delay: MagicMock, mock_fetch: MagicMock, tmp_path: Path,
    ) -> None:
        cache_path = tmp_path / "cached.html"
        with pytest.raises(FetchError):
            fetch_with_cache("https://example.com", cache_path, use_cache=True)
        assert not cache_path.exists()
