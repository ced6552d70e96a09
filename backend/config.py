"""Centralised settings for the Clipper backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("CLIPPER_WORKSPACE", Path.home() / ".clipper_data")
        )
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite database file."""
        return self.workspace_dir / "clipper.db"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    articles_collection: str = field(
        default_factory=lambda: os.environ.get("ARTICLES_COLLECTION", "articles")
    )

    # ------------------------------------------------------------------
    # Scraper
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "CLIPPER_USER_AGENT", "Mozilla/5.0 (compatible; Clipper/1.0)"
        )
    )
    max_content_length: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONTENT_LENGTH", "5000"))
    )

    # ------------------------------------------------------------------
    # HTTP surface
    # ------------------------------------------------------------------
    views_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get(
                "CLIPPER_VIEWS_DIR", Path(__file__).resolve().parent / "views"
            )
        )
    )
    public_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("CLIPPER_PUBLIC_DIR", "public"))
    )
    host: str = field(default_factory=lambda: os.environ.get("CLIPPER_HOST", "127.0.0.1"))
    port: int = field(
        default_factory=lambda: int(os.environ.get("CLIPPER_PORT", "8090"))
    )
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this everywhere:
#   from backend.config import settings
settings = Settings()
