"""
Exceptions raised by steamshot.
"""


class SteamshotError(Exception):
    """Base class for every error this package raises on purpose."""


class ConfigurationError(SteamshotError):
    """The apps list is missing, unreadable, or not shaped like Steam's GetAppList."""


class ParseError(SteamshotError):
    """A scraped string could not be turned into its typed value."""


class FetchError(SteamshotError):
    """A page or file could not be retrieved."""
