"""Shared fixtures: saved Steam pages and a fetcher that never touches the network."""

import os

import pytest

from steamshot.document import parse_html
from steamshot.errors import FetchError

_TEST_DIR = os.path.dirname(os.path.abspath(__file__))


def load_page(filename):
    path = os.path.join(_TEST_DIR, "Saved_pages", filename)
    with open(path, "r", encoding="utf-8") as f:
        return parse_html(f.read())


class FakeFetcher:
    """Serves documents from a dict of url -> Node (or Exception to raise)."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requested = []

    def fetch(self, url):
        self.requested.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(f"could not fetch {url}: 404")
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def listing_page():
    return load_page("listing_page.html")


@pytest.fixture
def detail_page():
    return load_page("detail_page.html")


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()
