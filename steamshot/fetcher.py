"""
Fetcher: the only part of steamshot that talks to the network.

Scrapers never build HTTP requests themselves; they get parsed documents from
an object with a fetch(url) method. Fetcher is the default one, built on
requests. Anything else with the same method (a test double, a cache) works too.
"""

import logging

import requests

from steamshot import config
from steamshot.document import Node, parse_html
from steamshot.errors import FetchError

logger = logging.getLogger(__name__)


class Fetcher:
    def __init__(self, user_agent: str = None, timeout: float = None, session: requests.Session = None):
        self.user_agent = user_agent or config.USER_AGENT
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.user_agent})

    def get(self, url: str, stream: bool = False) -> requests.Response:
        """GET a URL, raising FetchError on connection problems and HTTP errors."""
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout, stream=stream)
            response.raise_for_status()  # Raises exception if HTTP error (404, 500, etc.)
        except requests.RequestException as e:
            raise FetchError(f"could not fetch {url}: {e}") from e
        return response

    def fetch(self, url: str) -> Node:
        """Fetch an HTML page and parse it."""
        response = self.get(url)
        return parse_html(response.text)

    def download(self, url: str, path: str) -> str:
        """Save the body at url to path. Returns the path."""
        response = self.get(url, stream=True)
        try:
            with open(path, "wb") as f:
                for chunk in response.iter_content(chunk_size=64 * 1024):
                    f.write(chunk)
        except requests.RequestException as e:
            raise FetchError(f"could not download {url}: {e}") from e
        finally:
            response.close()
        logger.info("Saved %s to %s", url, path)
        return path
