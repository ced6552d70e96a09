"""HTTP fetcher: one GET per URL, failures raised as :class:`FetchError`."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from backend.config import settings
from backend.errors import FetchError
from backend.scraper.models import RawPage

logger = logging.getLogger(__name__)


def fetch_url(url: str, timeout: Optional[float] = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    A single GET is issued; redirects are followed and nothing is retried.
    Only a ``200`` response counts as success.

    Args:
        url: Absolute http(s) URL.
        timeout: Seconds before giving up.  Defaults to ``settings.request_timeout``.

    Raises:
        FetchError: On a transport failure (``cause`` set) or a non-200
            status (``status`` set).
    """
    try:
        with httpx.Client(
            headers={"User-Agent": settings.user_agent},
            timeout=settings.request_timeout if timeout is None else timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Fetch of %s failed: %s", url, exc)
        raise FetchError(url, cause=exc) from exc

    if response.status_code != 200:
        logger.warning("Fetch of %s returned status %d", url, response.status_code)
        raise FetchError(url, status=response.status_code)

    logger.debug("Fetched %s (%d bytes)", url, len(response.content))
    return RawPage(url=url, html=response.text, status_code=response.status_code)
