"""Record identifier generation."""

from __future__ import annotations

import secrets
import string

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 15


def new_id(length: int = ID_LENGTH) -> str:
    """Return a random lowercase alphanumeric identifier."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))
