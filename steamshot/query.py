"""
Listing URLs: where an app's screenshots live on Steam Community.
"""

from urllib.parse import urlencode

from steamshot import config

# Sort orders Steam understands for the browsefilter parameter
ORDERS = {
    "mostrecent": "Most recent",
    "toprated": "Top rated",
    "trendday": "Most popular today",
    "trendweek": "Most popular this week",
    "trendthreemonths": "Most popular in the last 3 months",
    "trendsixmonths": "Most popular in the last 6 months",
    "trendyear": "Most popular this year",
}
DEFAULT_ORDER = "mostrecent"


def build_listing_url(app, order: str = DEFAULT_ORDER, query: str = None,
                      page: int = 1, per_page: int = None, base_url: str = None) -> str:
    """
    Build the URL of one page of an app's screenshots.

    Args:
        app:      An App, or a bare app ID.
        order:    One of ORDERS. Not checked; Steam decides what it accepts.
        query:    Optional text to search screenshot titles for.
        page:     1-based page number.
        per_page: Optional number of screenshots per page.
        base_url: Steam Community root, defaults to config.STEAM_COMMUNITY_URL.

    Example:
        https://steamcommunity.com/app/377160/screenshots/?p=2&browsefilter=toprated&searchText=dogmeat
    """
    app_id = getattr(app, "id", app)
    base_url = (base_url or config.STEAM_COMMUNITY_URL).rstrip("/")

    params = [("p", page or 1), ("browsefilter", order or DEFAULT_ORDER)]
    if query:
        params.append(("searchText", query))
    if per_page:
        params.append(("numperpage", per_page))

    return f"{base_url}/app/{app_id}/screenshots/?{urlencode(params)}"
