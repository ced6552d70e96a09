"""Minimal DOM capability used by the extractor.

The extractor only ever needs three things from a parsed page: find elements
by CSS selector, remove an element, and read an element's text.  Anything
that provides those (a BeautifulSoup tree, or a hand-built fixture in tests)
satisfies :class:`Element`.
"""

from __future__ import annotations

from typing import List, Protocol

from bs4 import BeautifulSoup, Tag


class Element(Protocol):
    def select(self, selector: str) -> List["Element"]:
        """Return descendants matching *selector*, in document order."""
        ...

    def remove(self) -> None:
        """Detach this element (and its subtree) from the document."""
        ...

    def text(self) -> str:
        """Return the concatenated text of this element and its descendants."""
        ...


class SoupElement:
    """:class:`Element` backed by a BeautifulSoup tag."""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def select(self, selector: str) -> List[Element]:
        return [SoupElement(t) for t in self._tag.select(selector)]

    def remove(self) -> None:
        # extract() keeps working when an ancestor was already removed.
        self._tag.extract()

    def text(self) -> str:
        # No separator: adjacent text nodes are joined as-is.
        return self._tag.get_text()


def parse_html(html: str) -> Element:
    """Parse *html* into a navigable document."""
    return SoupElement(BeautifulSoup(html, "html.parser"))
