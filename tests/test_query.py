"""Tests for listing URLs."""

from unittest.mock import patch

import pytest

from steamshot import query
from steamshot.models import App
from steamshot.query import ORDERS, build_listing_url

BASE = "https://steamcommunity.com"


@pytest.fixture
def app():
    return App(id=377160, name="Fallout 4")


class TestBuildListingUrl:

    def test_defaults(self, app):
        assert build_listing_url(app, base_url=BASE) == \
            "https://steamcommunity.com/app/377160/screenshots/?p=1&browsefilter=mostrecent"

    @pytest.mark.parametrize("order", list(ORDERS))
    def test_orders(self, app, order):
        url = build_listing_url(app, order=order, base_url=BASE)
        assert url.endswith(f"?p=1&browsefilter={order}")

    def test_page(self, app):
        url = build_listing_url(app, order="trendyear", page=2, base_url=BASE)
        assert url == "https://steamcommunity.com/app/377160/screenshots/?p=2&browsefilter=trendyear"

    def test_search_text(self, app):
        url = build_listing_url(app, order="trendyear", query="dog meat", base_url=BASE)
        assert url.endswith("?p=1&browsefilter=trendyear&searchText=dog+meat")

    def test_per_page(self, app):
        url = build_listing_url(app, query="dogmeat", per_page=10, base_url=BASE)
        assert url.endswith("&searchText=dogmeat&numperpage=10")

    def test_none_falls_back_to_defaults(self, app):
        url = build_listing_url(app, order=None, page=None, base_url=BASE)
        assert url.endswith("?p=1&browsefilter=mostrecent")

    def test_unknown_order_passed_through(self, app):
        assert build_listing_url(app, order="newest", base_url=BASE).endswith("browsefilter=newest")

    def test_bare_app_id(self):
        assert build_listing_url("22330", base_url=BASE + "/").startswith(
            "https://steamcommunity.com/app/22330/screenshots/")

    def test_configured_base(self, app):
        with patch.object(query.config, "STEAM_COMMUNITY_URL", "http://localhost:8000"):
            assert build_listing_url(app).startswith("http://localhost:8000/app/377160/")
