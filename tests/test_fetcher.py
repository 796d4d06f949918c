"""
Tests for the plant list page fetcher.

HTTP is mocked; no network access is required.

Tests:
- Session setup (headers, cache)
- Successful and failing fetches
- Retry with exponential backoff
- Config-driven construction
"""

from unittest.mock import Mock, patch

import pytest
import requests
import requests_cache

from catplants.bootstrap.base_api import exponential_backoff_retry
from catplants.bootstrap.plant_list import PlantListFetcher, create_fetcher
from catplants.errors import FetchError, ScrapeError


def make_response(status=200, text="<html>ok</html>", from_cache=False):
    response = Mock()
    response.status_code = status
    response.text = text
    response.from_cache = from_cache
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    return response


# ============================================================================
# SESSION SETUP TESTS
# ============================================================================

class TestFetcherSetup:
    """Tests for fetcher construction."""

    def test_user_agent_header(self, fetcher):
        """Test the configured user agent is sent."""
        assert fetcher.session.headers["User-Agent"] == "canmycateatthat/0.1"

    def test_custom_user_agent(self):
        """Test user agent override."""
        with PlantListFetcher(use_cache=False, user_agent="tester/1.0") as f:
            assert f.session.headers["User-Agent"] == "tester/1.0"

    def test_default_url(self, fetcher):
        """Test the page URL default."""
        assert fetcher.url == "https://www.aspca.org/pet-care/animal-poison-control/cats-plant-list"

    def test_plain_session_without_cache(self, fetcher):
        """Test caching can be disabled."""
        assert not isinstance(fetcher.session, requests_cache.CachedSession)
        assert fetcher.cache_dir is None
        assert fetcher.get_cache_info() == {"backend": None, "responses_cached": 0}
        assert fetcher.save_raw_response("page", "<html/>") is None

    def test_cached_session(self, tmp_path):
        """Test a cached session is created under the cache directory."""
        with PlantListFetcher(cache_dir=tmp_path) as f:
            assert isinstance(f.session, requests_cache.CachedSession)
            assert f.cache_dir == tmp_path / "plantlist"
            assert f.cache_dir.exists()

            path = f.save_raw_response("cats/plant-list", "<html/>")
            assert path.name == "cats_plant-list.html"
            assert path.read_text(encoding="utf-8") == "<html/>"


# ============================================================================
# FETCH TESTS
# ============================================================================

class TestFetch:
    """Tests for fetching the page."""

    def test_fetch_success(self, fetcher):
        """Test the page body is returned."""
        with patch.object(fetcher.session, "get", return_value=make_response(text="<p>page</p>")) as mock_get:
            assert fetcher.fetch() == "<p>page</p>"

        mock_get.assert_called_once_with(fetcher.url, params=None, timeout=30)

    def test_empty_body_is_fetch_error(self, fetcher):
        """Test an empty body fails the run."""
        with patch.object(fetcher.session, "get", return_value=make_response(text="   ")):
            with pytest.raises(FetchError, match="Empty response body"):
                fetcher.fetch()

    @patch("catplants.bootstrap.base_api.time.sleep")
    def test_http_error_after_retries(self, mock_sleep, fetcher):
        """Test a non-2xx status raises FetchError once retries are spent."""
        with patch.object(fetcher.session, "get", return_value=make_response(status=503)) as mock_get:
            with pytest.raises(FetchError, match="HTTP error 503"):
                fetcher.fetch()

        assert mock_get.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch("catplants.bootstrap.base_api.time.sleep")
    def test_timeout_is_fetch_error(self, mock_sleep, fetcher):
        """Test timeouts are reported as FetchError."""
        with patch.object(fetcher.session, "get", side_effect=requests.Timeout("slow")):
            with pytest.raises(FetchError, match="timeout"):
                fetcher.fetch()

    @patch("catplants.bootstrap.base_api.time.sleep")
    def test_connection_error_is_fetch_error(self, mock_sleep, fetcher):
        """Test connection failures are reported as FetchError."""
        with patch.object(fetcher.session, "get", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(FetchError, match="Request failed"):
                fetcher.fetch()

    @patch("catplants.bootstrap.base_api.time.sleep")
    def test_recovers_after_transient_failure(self, mock_sleep, fetcher):
        """Test a retry succeeds after one failure."""
        responses = [requests.ConnectionError("reset"), make_response(text="<p>ok</p>")]
        with patch.object(fetcher.session, "get", side_effect=responses):
            assert fetcher.fetch() == "<p>ok</p>"
        mock_sleep.assert_called_once_with(1.0)

    def test_fetch_error_is_scrape_error(self):
        """Test error hierarchy."""
        assert issubclass(FetchError, ScrapeError)


# ============================================================================
# RETRY DECORATOR TESTS
# ============================================================================

class TestRetryDecorator:
    """Tests for exponential_backoff_retry."""

    @patch("catplants.bootstrap.base_api.time.sleep")
    def test_delay_capped(self, mock_sleep):
        """Test delays double and are capped at max_delay."""
        func = Mock(side_effect=FetchError("down"))
        wrapped = exponential_backoff_retry(max_retries=4, base_delay=1.0, max_delay=3.0)(func)

        with pytest.raises(FetchError):
            wrapped()

        assert func.call_count == 5
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0, 3.0, 3.0]

    def test_other_exceptions_not_retried(self):
        """Test unrelated errors propagate immediately."""
        func = Mock(side_effect=ValueError("bad"))
        wrapped = exponential_backoff_retry(max_retries=3)(func)

        with pytest.raises(ValueError):
            wrapped()
        assert func.call_count == 1

    @patch("catplants.bootstrap.base_api.time.sleep")
    def test_instance_max_retries(self, mock_sleep):
        """Test the owner's max_retries overrides the default."""
        fetcher = PlantListFetcher(use_cache=False, max_retries=0)
        with patch.object(fetcher.session, "get", return_value=make_response(status=500)) as mock_get:
            with pytest.raises(FetchError):
                fetcher.fetch()
        fetcher.close()

        assert mock_get.call_count == 1
        mock_sleep.assert_not_called()


# ============================================================================
# CONFIG TESTS
# ============================================================================

class TestCreateFetcher:
    """Tests for config-driven construction."""

    def test_from_config(self, tmp_path):
        """Test source and fetch sections are applied."""
        config = {
            "source": {"url": "https://example.org/plants", "user_agent": "cfg/2.0"},
            "fetch": {"timeout": 5, "max_retries": 1, "use_cache": False, "cache_dir": str(tmp_path)},
        }
        with create_fetcher(config) as f:
            assert f.url == "https://example.org/plants"
            assert f.timeout == 5
            assert f.max_retries == 1
            assert f.session.headers["User-Agent"] == "cfg/2.0"
            assert f.cache_dir is None

    def test_from_empty_config(self, tmp_path, monkeypatch):
        """Test defaults when no config is given."""
        monkeypatch.chdir(tmp_path)
        with create_fetcher() as f:
            assert f.url == PlantListFetcher.DEFAULT_URL
            assert f.timeout == 30
            assert f.max_retries == 3
