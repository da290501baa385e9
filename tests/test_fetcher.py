"""Tests for the default requests-based Fetcher."""

from unittest.mock import MagicMock

import pytest
import requests

from steamshot.errors import FetchError
from steamshot.fetcher import Fetcher


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.headers = {}
    return s


@pytest.fixture
def fetcher(session):
    return Fetcher(user_agent="steamshot-tests", timeout=3, session=session)


class TestFetcher:

    def test_sets_user_agent(self, fetcher, session):
        assert session.headers["User-Agent"] == "steamshot-tests"

    def test_fetch_parses_html(self, fetcher, session):
        session.get.return_value.text = '<div class="apphub_Card" data-modal-content-url="u"></div>'
        document = fetcher.fetch("https://steamcommunity.com/app/1/screenshots/")

        assert document.first(".apphub_Card").attr("data-modal-content-url") == "u"
        session.get.assert_called_once_with("https://steamcommunity.com/app/1/screenshots/",
                                            timeout=3, stream=False)

    def test_http_error(self, fetcher, session):
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        with pytest.raises(FetchError, match="404"):
            fetcher.fetch("https://steamcommunity.com/missing")

    def test_connection_error(self, fetcher, session):
        session.get.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(FetchError) as exc:
            fetcher.fetch("https://steamcommunity.com/")
        assert isinstance(exc.value.__cause__, requests.ConnectionError)

    def test_download_writes_file(self, fetcher, session, tmp_path):
        session.get.return_value.iter_content.return_value = [b'{"applist":', b' {"apps": []}}']
        path = str(tmp_path / "apps-list.json")

        assert fetcher.download("https://api.steampowered.com/ISteamApps/GetAppList/v2", path) == path
        with open(path, "rb") as f:
            assert f.read() == b'{"applist": {"apps": []}}'
        session.get.return_value.close.assert_called_once()

    def test_download_error_creates_no_file(self, fetcher, session, tmp_path):
        session.get.side_effect = requests.Timeout("timed out")
        path = tmp_path / "apps-list.json"
        with pytest.raises(FetchError):
            fetcher.download("https://api.steampowered.com/ISteamApps/GetAppList/v2", str(path))
        assert not path.exists()
