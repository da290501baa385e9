"""
Parsed documents: the small slice of an HTML tree the scrapers need.

Scrapers only ever ask four things of a page: find the first match for a CSS
selector, find all matches, read an attribute, read trimmed text. Node wraps
a BeautifulSoup element to offer exactly that.
"""

from typing import Optional

from bs4 import BeautifulSoup, NavigableString, Tag


class Node:
    """One element of a parsed HTML document."""

    def __init__(self, element: Tag):
        self.element = element

    def first(self, selector: str) -> Optional["Node"]:
        found = self.element.select_one(selector)
        return Node(found) if found is not None else None

    def all(self, selector: str) -> list["Node"]:
        return [Node(found) for found in self.element.select(selector)]

    def attr(self, name: str) -> Optional[str]:
        value = self.element.get(name)
        if isinstance(value, list):  # multi-valued attributes such as class
            value = " ".join(value)
        return value

    def text(self) -> str:
        """All text inside the element, trimmed."""
        return self.element.get_text().strip()

    def own_text(self) -> str:
        """Only the text directly inside the element, not inside its children."""
        parts = [child for child in self.element.children if type(child) is NavigableString]
        return "".join(parts).strip()

    def __repr__(self):
        return f"<Node {self.element.name}>"


def parse_html(markup) -> Node:
    """Parse an HTML string (or bytes) into a Node for the whole document."""
    return Node(BeautifulSoup(markup, "html.parser"))
