"""
Value parsers: turn the raw text scraped from Steam pages into typed values.

Every function here is pure: strings in, values out, ParseError on garbage.
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional
from urllib.parse import urlsplit

from dateutil import parser as dateparser

from steamshot.errors import ParseError

# Decimal units, the way Steam displays them ("0.547 MB")
SIZE_UNITS = {"B": 0, "KB": 1, "MB": 2, "GB": 3}
SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?) ?([KMG]?B)\s*$", re.IGNORECASE)

DIMENSIONS_PATTERN = re.compile(r"^\s*(\d+)\s*[x×]\s*(\d+)\s*$", re.IGNORECASE)

RESIZED_IMAGE_SUFFIX = ".resizedimage"


def parse_size(text: str) -> int:
    """
    Convert a human-readable file size into a byte count.

    Steam uses 1000-based units, so "0.789 MB" is 789000 bytes, not 827326.
    Fractional bytes are rounded half-up.
    """
    if text is None:
        raise ParseError("no file size given")

    match = SIZE_PATTERN.match(text)
    if not match:
        raise ParseError(f"unrecognized file size: {text!r}")

    number, unit = match.groups()
    try:
        amount = Decimal(number) * (1000 ** SIZE_UNITS[unit.upper()])
    except InvalidOperation as exc:
        raise ParseError(f"unrecognized file size: {text!r}") from exc

    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def normalize_image_url(url: Optional[str]) -> Optional[str]:
    """Keep only scheme, host and path of an image URL."""
    if not url:
        return None
    try:
        parts = urlsplit(url)
    except ValueError:  # e.g. "http://[bad/x.jpg" (unbalanced IPv6 brackets)
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


def derive_full_size_url(medium_url: Optional[str]) -> Optional[str]:
    """
    Get the original image URL from a resized one.

    Steam serves thumbnails as <asset>/<W>x<H>.resizedimage; dropping the
    last segment gives the asset itself:

        https://host/ugc/123/ABC/640x359.resizedimage -> https://host/ugc/123/ABC/

    Returns None when the URL is not a resized image.
    """
    url = normalize_image_url(medium_url)
    if not url or not url.endswith(RESIZED_IMAGE_SUFFIX):
        return None

    size_part = url.split("/")[-1]  # e.g., 640x359.resizedimage
    if size_part == RESIZED_IMAGE_SUFFIX:
        return None
    return url.split(size_part, 1)[0]


def parse_date(text: str) -> datetime:
    """
    Parse a date as shown on a screenshot page, e.g. "Oct 29, 2016 @ 9:45am".

    The result is naive. Steam does not say which timezone it rendered in.
    """
    if not text or not text.strip():
        raise ParseError("no date given")

    cleaned = text.replace("@", " ").strip()
    try:
        parsed = dateparser.parse(cleaned)
    except (ValueError, OverflowError) as exc:
        raise ParseError(f"unrecognized date: {text!r}") from exc

    return parsed.replace(tzinfo=None)


def parse_dimensions(text: str) -> tuple[int, int]:
    """Parse "3840 x 2160" into (3840, 2160)."""
    match = DIMENSIONS_PATTERN.match(text or "")
    if not match:
        raise ParseError(f"unrecognized dimensions: {text!r}")
    return int(match.group(1)), int(match.group(2))


def parse_count(text: Optional[str]) -> int:
    """Counters like "1,234" → 1234. Missing or non-numeric counters count as zero."""
    if not text:
        return 0
    digits = text.strip().replace(",", "")
    if not digits.isdecimal():
        return 0
    return int(digits)


def coerce_app_id(app_id) -> int:
    """Steam app IDs arrive as ints from the catalog and as strings from users."""
    if isinstance(app_id, bool):
        raise ParseError(f"not an app ID: {app_id!r}")
    if isinstance(app_id, int):
        return app_id
    try:
        return int(str(app_id).strip())
    except (TypeError, ValueError) as exc:
        raise ParseError(f"not an app ID: {app_id!r}") from exc
