"""Logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging

from backend.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Level name such as ``"DEBUG"``.  Defaults to ``settings.log_level``.
    """
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
