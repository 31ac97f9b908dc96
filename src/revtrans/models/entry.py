"""Entry and field models for recovered Revelation records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Optional

from revtrans.exceptions import format_location

# Field id whose value is stored as the entry secret instead of a field
SECRET_FIELD_ID = "generic-password"


@dataclass(frozen=True, slots=True)
class Field:
    """A named attribute of an entry.

    Attributes:
        id: Revelation field id (e.g., "generic-username")
        value: Field value as text
    """

    id: str
    value: str


@dataclass
class Entry:
    """A secret record recovered from a vault.

    Attributes:
        folder_path: Folder names from the root to the entry's folder.
            Empty for entries stored directly in the root.
        name: Entry name
        kind: Revelation entry type (e.g., "generic", "website")
        last_updated: Unix timestamp of the last modification
        description: Optional free-text description
        secret: Value of the password field, if any
        fields: All other fields keyed by id
    """

    folder_path: list[str]
    name: str
    kind: str
    last_updated: int
    description: Optional[str] = None
    secret: Optional[str] = None
    fields: dict[str, Field] = field(default_factory=dict)

    def add_field(self, item: Field) -> None:
        """Store a field, replacing any earlier field with the same id.

        The secret field is promoted to ``secret`` and never stored in
        ``fields``.
        """
        if item.id == SECRET_FIELD_ID:
            self.secret = item.value
        else:
            self.fields[item.id] = item

    def get_field(self, field_id: str) -> Field:
        """Get a field by id.

        Raises:
            KeyError: If the entry has no such field
        """
        if field_id not in self.fields:
            raise KeyError(f"The field '{field_id}' is not available in this entry")
        return self.fields[field_id]

    @property
    def location(self) -> str:
        """Slash-separated path of the entry, e.g. ``/Work/Mail/Gmail``."""
        return format_location(self.folder_path, self.name)

    @property
    def last_updated_at(self) -> datetime:
        """Last modification as an aware UTC datetime."""
        return datetime.fromtimestamp(self.last_updated, tz=UTC)

    def __str__(self) -> str:
        return f'Entry: "{self.location}" ({self.kind})'
