"""Scraper package — web fetch & article extraction."""

from backend.scraper.document import Element, parse_html
from backend.scraper.extractor import extract_article, extract_content
from backend.scraper.fetcher import fetch_url
from backend.scraper.models import Article, RawPage

__all__ = [
    "fetch_url",
    "extract_article",
    "extract_content",
    "parse_html",
    "Element",
    "RawPage",
    "Article",
]
