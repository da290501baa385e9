"""
Screenshot scraper: reads Steam Community pages into Screenshot objects.

Two pages are involved:
    - The listing page (one per app, order and page number) shows a grid of
      "cards": title, thumbnail, uploader and a link to the details page.
    - The details page of a single screenshot adds date, file size,
      dimensions, likes and comments.

scrape_listing() and scrape_details() only read already-parsed documents.
get_app_screenshots(), get_screenshot() and expand_details() fetch the
documents through a fetcher and hand them to the two scrapers.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from steamshot import config
from steamshot.document import Node
from steamshot.errors import FetchError, ParseError
from steamshot.fetcher import Fetcher
from steamshot.models import App, Screenshot
from steamshot.parsers import (
    derive_full_size_url, normalize_image_url,
    parse_count, parse_date, parse_dimensions,
)
from steamshot.query import DEFAULT_ORDER, build_listing_url

logger = logging.getLogger(__name__)

# Listing page selectors
CARD = ".apphub_Card"
CARD_DETAILS_URL_ATTR = "data-modal-content-url"
CARD_PREVIEW_IMAGE = ".apphub_CardContentPreviewImage"
CARD_TITLE = ".apphub_CardMetaData .apphub_CardContentTitle"
CARD_AUTHOR_LINK = ".apphub_CardContentAuthorBlock .apphub_CardContentAuthorName a"

# Details page selectors
DETAIL_STAT_LABELS = ".detailsStatsContainerLeft .detailsStatLeft"
DETAIL_STAT_VALUES = ".detailsStatsContainerRight .detailsStatRight"
DETAIL_IMAGE = "#ActualMedia"
DETAIL_DESCRIPTION = ".screenshotDescription"
DETAIL_LIKES = "#VotesUpCount"
DETAIL_COMMENTS = ".commentthread_count_label span"
DETAIL_AUTHOR_BLOCK = ".creatorsBlock .friendBlock"


# ============================================================
# LISTING PAGE
# ============================================================

def scrape_listing(document: Node, app: App = None) -> list[Screenshot]:
    """
    Turn a listing page into screenshots, one per card, in page order.

    The page order is the sort order that was asked for, so it is kept as is.
    Cards missing a piece of markup give screenshots missing that field;
    only a page that could not be fetched at all is an error.

    Args:
        document: The parsed listing page.
        app:      The app the page belongs to, attached to every screenshot.
    """
    cards = document.all(CARD)
    screenshots = [_screenshot_from_card(card, app) for card in cards]
    logger.debug("Found %d screenshot cards", len(screenshots))
    return screenshots


def _screenshot_from_card(card: Node, app: Optional[App]) -> Screenshot:
    medium_url = _medium_url_from(card)
    user_name, user_url = _user_from_links(card.all(CARD_AUTHOR_LINK))
    return Screenshot(
        details_url=card.attr(CARD_DETAILS_URL_ATTR),
        title=_title_from(card),
        medium_url=medium_url,
        full_size_url=derive_full_size_url(medium_url),
        user_name=user_name,
        user_url=user_url,
        app=app,
    )


def _medium_url_from(card: Node) -> Optional[str]:
    image = card.first(CARD_PREVIEW_IMAGE)
    if image is None:
        return None
    # Drop the resize/format query string, keep scheme + host + path
    return normalize_image_url(image.attr("src"))


def _title_from(card: Node) -> Optional[str]:
    title_el = card.first(CARD_TITLE)
    if title_el is None:
        return None
    title = title_el.text()
    return title or None


def _user_from_links(links: list[Node]) -> tuple[Optional[str], Optional[str]]:
    """
    Uploader name and profile URL, from the LAST author link.

    Cards sometimes list more than one author link (e.g. a group and then the
    person); Steam puts the uploader last. Name and URL are both None, or both set.
    """
    if not links:
        return None, None
    link = links[-1]
    url = link.attr("href")
    if not url:
        return None, None
    return link.text(), url


# ============================================================
# DETAILS PAGE
# ============================================================

def scrape_details(document: Node, screenshot: Screenshot) -> Screenshot:
    """
    Fill in a screenshot from its details page. Updates and returns screenshot.

    Fields the listing already provided (title, thumbnail, uploader) are only
    taken from the details page when the screenshot does not have them yet,
    which is the case when it was built from nothing but its details URL.
    A thumbnail taken from the details page is normalized the same way as a
    listing one (query string dropped).

    An unreadable date or dimensions string is logged and leaves only that
    field None; the rest of the page is still read.
    """
    stats = _stats_from(document)

    if "file size" in stats:
        screenshot.file_size = stats["file size"]
    if "posted" in stats:
        try:
            screenshot.date = parse_date(stats["posted"])
        except ParseError as e:
            logger.warning("Bad date on %s: %s", screenshot.details_url, e)
    if "size" in stats:
        try:
            screenshot.width, screenshot.height = parse_dimensions(stats["size"])
        except ParseError as e:
            logger.warning("Bad dimensions on %s: %s", screenshot.details_url, e)

    likes = document.first(DETAIL_LIKES)
    comments = document.first(DETAIL_COMMENTS)
    screenshot.like_count = parse_count(likes.text() if likes else None)
    screenshot.comment_count = parse_count(comments.text() if comments else None)

    if not screenshot.medium_url:
        image = document.first(DETAIL_IMAGE)
        if image is not None:
            screenshot.medium_url = normalize_image_url(image.attr("src"))
            screenshot.full_size_url = derive_full_size_url(screenshot.medium_url)

    if not screenshot.title:
        description = document.first(DETAIL_DESCRIPTION)
        if description is not None:
            screenshot.title = description.text().strip("\"“”").strip() or None

    if not screenshot.user_url:
        screenshot.user_name, screenshot.user_url = _user_from_author_blocks(document)

    return screenshot


def _stats_from(document: Node) -> dict[str, str]:
    """The "File Size / Posted / Size" table, keyed by lowercase label."""
    labels = [label.text().lower() for label in document.all(DETAIL_STAT_LABELS)]
    values = [value.text() for value in document.all(DETAIL_STAT_VALUES)]
    return dict(zip(labels, values))


def _user_from_author_blocks(document: Node) -> tuple[Optional[str], Optional[str]]:
    # Same rule as the listing: the last author wins
    blocks = document.all(DETAIL_AUTHOR_BLOCK)
    if not blocks:
        return None, None
    block = blocks[-1]
    link = block.first("a.friendBlockLinkOverlay")
    content = block.first(".friendBlockContent")
    if link is None or content is None or not link.attr("href"):
        return None, None
    return content.own_text(), link.attr("href")


# ============================================================
# FETCHING + SCRAPING
# ============================================================

def get_app_screenshots(app: App, fetcher: Fetcher = None, order: str = DEFAULT_ORDER,
                        query: str = None, page: int = 1, per_page: int = None,
                        with_details: bool = False, max_workers: int = None) -> list[Screenshot]:
    """
    Fetch one page of an app's screenshots.

    Args:
        app:          The app whose screenshots to list.
        fetcher:      Anything with fetch(url) -> Node. Defaults to a new Fetcher.
        order:        One of query.ORDERS, e.g. "toprated" or "trendweek".
        query:        Optional text to search for.
        page:         1-based page number. One page per call.
        per_page:     Optional page size.
        with_details: Also fetch every screenshot's details page.
        max_workers:  Details pages fetched at once (see expand_details).

    Returns:
        Screenshots in the order Steam listed them, each pointing back to app.
    """
    if not app or not app.id:
        return []

    fetcher = fetcher or Fetcher()
    url = build_listing_url(app, order=order, query=query, page=page, per_page=per_page)

    logger.info("Fetching %s screenshots for %s (page %s)", order, app.name or app.id, page)
    document = fetcher.fetch(url)
    screenshots = scrape_listing(document, app=app)
    logger.info("Found %d screenshots on %s", len(screenshots), url)

    if with_details:
        expand_details(screenshots, fetcher=fetcher, max_workers=max_workers)

    return screenshots


def get_screenshot(details_url: str, fetcher: Fetcher = None, title: str = None) -> Screenshot:
    """
    Build a screenshot from its details URL and scrape the details right away.

    The app is left unset: the details page is not used to guess it.
    Fetch and parse errors propagate.
    """
    fetcher = fetcher or Fetcher()
    screenshot = Screenshot(details_url=details_url, title=title)
    return scrape_details(fetcher.fetch(details_url), screenshot)


def expand_details(screenshots: list[Screenshot], fetcher: Fetcher = None,
                   max_workers: int = None) -> list[Screenshot]:
    """
    Scrape the details page of every screenshot, in place.

    Pages are fetched in parallel but the list keeps its order. A screenshot
    whose page fails to fetch or parse is logged and skipped; the
    others carry on. Nothing is retried.
    """
    fetcher = fetcher or Fetcher()
    max_workers = max_workers or config.DETAIL_WORKERS

    def expand(screenshot: Screenshot) -> Screenshot:
        if not screenshot.details_url:
            return screenshot
        try:
            return scrape_details(fetcher.fetch(screenshot.details_url), screenshot)
        except (FetchError, ParseError) as e:
            logger.warning("Skipping details for %s: %s", screenshot.details_url, e)
            return screenshot

    if max_workers <= 1 or len(screenshots) <= 1:
        for screenshot in screenshots:
            expand(screenshot)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            list(pool.map(expand, screenshots))

    logger.info("Fetched details for %d screenshots", len(screenshots))
    return screenshots
