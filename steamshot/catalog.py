"""
Catalog: find Steam apps by name or ID in Steam's bulk app list.

The app list is a JSON file shaped exactly like Steam's GetAppList response:

    {"applist": {"apps": [{"appid": 22330, "name": "The Elder Scrolls IV: Oblivion "}, ...]}}

Loading (load_catalog) and matching (search_by_substring, find_by_id,
find_by_name) are kept apart: the matchers are pure functions over a list of
raw entries, so callers decide when to reload the file and whether to cache it.
"""

import json
import logging
import os
from typing import Optional

from steamshot import config
from steamshot.errors import ConfigurationError, ParseError
from steamshot.fetcher import Fetcher
from steamshot.models import App
from steamshot.parsers import coerce_app_id

logger = logging.getLogger(__name__)


# ============================================================
# LOADING
# ============================================================

def download_apps_list(path: str, fetcher: Fetcher = None, url: str = None) -> str:
    """Write the latest list of Steam apps to path, as JSON. Returns the path."""
    fetcher = fetcher or Fetcher()
    url = url or config.APPS_LIST_URL
    logger.info("Downloading Steam apps list from %s", url)
    return fetcher.download(url, path)


def load_catalog(path: Optional[str]) -> list[dict]:
    """
    Read the apps list at path and return its raw entries.

    Raises ConfigurationError when the path is unset, is not a file, is not
    JSON, or does not hold applist.apps.
    """
    if not path:
        raise ConfigurationError("no path configured for JSON apps list from Steam")

    if not os.path.isfile(path):
        raise ConfigurationError(f"{path} is not a file")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"{path} is not a valid JSON file") from e

    applist = data.get("applist") if isinstance(data, dict) else None
    if not isinstance(applist, dict):
        raise ConfigurationError(f"{path} does not have expected JSON format")

    apps = applist.get("apps")
    if not isinstance(apps, list):
        raise ConfigurationError(f"{path} does not have expected JSON format")

    logger.debug("Loaded %d apps from %s", len(apps), path)
    return apps


# ============================================================
# MATCHING: pure functions over the raw entries
# ============================================================

def _app_from(entry: dict) -> Optional[App]:
    try:
        return App(id=entry.get("appid"), name=entry.get("name"))
    except ParseError:
        logger.debug("Skipping catalog entry without a usable appid: %r", entry)
        return None


def search_by_substring(query: Optional[str], catalog: list[dict]) -> list[App]:
    """
    Every app whose name contains query, ignoring case, in catalog order.

    Results are not ranked: callers that take the first hit get the first
    match in the catalog, whatever its name ends with.
    """
    if not query:
        return []

    query = query.lower()
    results = []
    for entry in catalog:
        name = entry.get("name")
        if not name:
            continue
        if query in name.lower():
            app = _app_from(entry)
            if app:
                results.append(app)
    return results


def find_by_id(app_id, catalog: list[dict]) -> Optional[App]:
    """The app with the given ID (int or numeric string), or None."""
    wanted = coerce_app_id(app_id)
    for entry in catalog:
        try:
            entry_id = coerce_app_id(entry.get("appid"))
        except ParseError:
            continue
        if entry_id == wanted:
            return App(id=entry_id, name=entry.get("name"))
    return None


def find_by_name(name: Optional[str], catalog: list[dict]) -> Optional[App]:
    """The first app whose name matches exactly, ignoring case, or None."""
    if not name:
        return None

    wanted = name.lower()
    for entry in catalog:
        entry_name = entry.get("name")
        if entry_name and entry_name.lower() == wanted:
            app = _app_from(entry)
            if app:
                return app
    return None


# ============================================================
# PATH-BASED LOOKUPS: load the configured file, then match
# ============================================================

def search_apps(query: Optional[str], apps_list_path: str = None) -> list[App]:
    """search_by_substring over the apps list file. An empty query never opens the file."""
    if not query:
        return []
    catalog = load_catalog(apps_list_path or config.STEAM_APPS_LIST_PATH)
    results = search_by_substring(query, catalog)
    logger.info("Found %d apps matching %r", len(results), query)
    return results


def find_app_by_id(app_id, apps_list_path: str = None) -> Optional[App]:
    catalog = load_catalog(apps_list_path or config.STEAM_APPS_LIST_PATH)
    return find_by_id(app_id, catalog)


def find_app_by_name(name: Optional[str], apps_list_path: str = None) -> Optional[App]:
    if not name:
        return None
    catalog = load_catalog(apps_list_path or config.STEAM_APPS_LIST_PATH)
    return find_by_name(name, catalog)
