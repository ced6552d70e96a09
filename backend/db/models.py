"""Dataclass models representing DB rows.

These are plain Python objects – not ORM models.  The DB layer serialises /
deserialises to and from these types.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Collection:
    id: str
    name: str
    fields: list[str]
    created_at: int
    updated_at: int


@dataclass
class Record:
    id: str
    collection: Collection
    data: dict[str, Any] = field(default_factory=dict)
    created_at: int = 0
    updated_at: int = 0

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    def set(self, name: str, value: Any) -> None:
        """Assign a field value (validated on save)."""
        self.data[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def data_json(self) -> str:
        """Serialise the field map to a JSON string for storage."""
        return json.dumps(self.data)

    def to_dict(self) -> dict[str, Any]:
        """Flat representation used by the API: system fields plus data."""
        return {
            **self.data,
            "id": self.id,
            "collectionId": self.collection.id,
            "collectionName": self.collection.name,
            "created": self.created_at,
            "updated": self.updated_at,
        }
