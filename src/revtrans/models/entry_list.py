"""Ordered container of recovered entries."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .entry import Entry


class EntryList:
    """Append-only list of entries in document order.

    No deduplication is done; two entries with the same name and folder
    are both kept.
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def add_entry(self, entry: Entry) -> None:
        """Append an entry."""
        self._entries.append(entry)

    def entries(self) -> list[Entry]:
        """Return the entries in insertion order."""
        return list(self._entries)

    def find_entries(
        self,
        name: str | None = None,
        kind: str | None = None,
        folder_path: Sequence[str] | None = None,
    ) -> list[Entry]:
        """Find entries matching all given criteria.

        Args:
            name: Exact entry name
            kind: Exact entry type
            folder_path: Exact folder path (``[]`` for root entries)

        Returns:
            Matching entries in insertion order
        """
        results = []
        for entry in self._entries:
            if name is not None and entry.name != name:
                continue
            if kind is not None and entry.kind != kind:
                continue
            if folder_path is not None and entry.folder_path != list(folder_path):
                continue
            results.append(entry)
        return results

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EntryList(<{len(self._entries)} entries>)"
