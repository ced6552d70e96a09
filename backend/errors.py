"""Request-scoped error kinds.

Every error raised while handling a single link carries the HTTP status the
API should answer with, a short human message, and the underlying cause.
None of them is fatal to the serving process.
"""

from __future__ import annotations

from typing import Optional


class ClipperError(Exception):
    """Base class for errors reported back to the caller."""

    status_code: int = 500
    message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None) -> None:
        self.message = message or self.message
        self.cause = cause
        super().__init__(self.message)

    @property
    def detail(self) -> str:
        """Text of the underlying cause, or an empty string."""
        return str(self.cause) if self.cause is not None else ""

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "detail": self.detail}


class MalformedRequest(ClipperError):
    """The request body could not be read or lacks a string ``url``."""

    status_code = 400
    message = "Failed to read request body"


class FetchError(ClipperError):
    """The page could not be retrieved.

    Exactly one of ``cause`` (transport failure) or ``status`` (non-200
    response) is set.
    """

    status_code = 502
    message = "Failed to fetch page"

    def __init__(
        self,
        url: str,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
    ) -> None:
        self.url = url
        self.status = status
        if status is not None:
            message = f"Failed to fetch page: status code {status} from {url}"
        else:
            message = f"Failed to fetch page: {url}"
        super().__init__(message, cause)

    @property
    def detail(self) -> str:
        if self.status is not None:
            return f"unexpected status code {self.status}"
        return super().detail


class PersistenceError(ClipperError):
    """The record sink rejected the write."""

    status_code = 500
    message = "Failed to save to database"
