"""Article extraction: turns a :class:`RawPage` into an :class:`Article`."""

from __future__ import annotations

import re
from typing import Optional

from backend.config import settings
from backend.scraper.document import Element, parse_html
from backend.scraper.models import Article, RawPage

# Elements whose text never belongs in the article body.
_NON_CONTENT_SELECTOR = "style, noscript, script"

# ASCII whitespace only; NBSP and other Unicode spaces are kept inside the text.
_WHITESPACE_RE = re.compile(r"[ \t\n\f\r]+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _first(root: Element, selector: str) -> Optional[Element]:
    matches = root.select(selector)
    return matches[0] if matches else None


def _strip_non_content(root: Element) -> None:
    for element in root.select(_NON_CONTENT_SELECTOR):
        element.remove()


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run into one space and trim both ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate(text: str, max_length: int) -> str:
    """Cut *text* to at most *max_length* characters.

    The cut lands exactly on the boundary, even mid-word.
    """
    if len(text) > max_length:
        return text[:max_length]
    return text


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_article(document: Element, max_length: Optional[int] = None) -> Article:
    """Extract the title and body text of the first ``<article>`` in *document*.

    Script, style and noscript elements are removed from *document* first.
    The title is the text of the first ``<h1>`` inside that article; there is
    no fallback to headings elsewhere on the page.  A page without an article
    yields an empty :class:`Article` rather than an error.

    Args:
        document: Parsed page, mutated in place.
        max_length: Content cap in characters.  Defaults to
            ``settings.max_content_length``.
    """
    limit = settings.max_content_length if max_length is None else max_length

    _strip_non_content(document)

    article = _first(document, "article")
    if article is None:
        return Article(title="", content="")

    heading = _first(article, "h1")
    title = heading.text() if heading is not None else ""
    content = truncate(normalize_whitespace(article.text()), limit)

    return Article(title=title, content=content)


def extract_content(raw: RawPage, max_length: Optional[int] = None) -> Article:
    """Parse ``raw.html`` and extract its article."""
    return extract_article(parse_html(raw.html), max_length=max_length)
