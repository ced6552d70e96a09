"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class Article:
    """Title and body text extracted from a :class:`RawPage`.

    Transient: it has no identity of its own until the record store saves it.
    """

    title: str = ""
    content: str = ""

    def as_fields(self) -> dict[str, str]:
        """Return the field map handed to the record store."""
        return {"title": self.title, "content": self.content}
