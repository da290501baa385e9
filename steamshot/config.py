"""
Configuration loader.
Reads settings from .env file and makes them available to the rest of the package.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Catalog: JSON file produced by download_apps_list(), shaped like Steam's GetAppList
STEAM_APPS_LIST_PATH = os.getenv("STEAM_APPS_LIST_PATH")
APPS_LIST_URL = os.getenv("STEAM_APPS_LIST_URL", "https://api.steampowered.com/ISteamApps/GetAppList/v2")

# Steam Community pages
STEAM_COMMUNITY_URL = os.getenv("STEAM_COMMUNITY_URL", "https://steamcommunity.com")

# HTTP settings for the default fetcher
USER_AGENT = os.getenv("STEAMSHOT_USER_AGENT", "steamshot/0.1")
REQUEST_TIMEOUT = float(os.getenv("STEAMSHOT_REQUEST_TIMEOUT", "10"))

# How many detail pages to fetch at once
DETAIL_WORKERS = int(os.getenv("STEAMSHOT_DETAIL_WORKERS", "4"))

# Dashboard
DASHBOARD_PAGE_SIZE = int(os.getenv("STEAMSHOT_DASHBOARD_PAGE_SIZE", "10"))
