"""Writer for the CSV import format of the Secrets for Android application.

Secrets only knows five columns, so everything without a natural column
(entry type, description, timestamp and extra fields) goes into the notes:

    "Description","Id","PIN","Email","Notes"
    "/Work/Mail",,"hunter2",,"Revelation-Type: email
    Last updated: 1262304000
    generic-username: me
    "

Empty columns are written without quotes because the Secrets importer does
not handle ``""`` properly.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from revtrans.models import Entry, EntryList

logger = logging.getLogger(__name__)

HEADER = ("Description", "Id", "PIN", "Email", "Notes")


@dataclass
class SecretsRow:
    """One CSV row in Secrets column order."""

    description: str = ""
    id: str = ""
    pin: str = ""
    email: str = ""
    notes: list[str] = field(default_factory=list)

    def add_note(self, note: str) -> None:
        """Append a line to the notes column."""
        self.notes.append(note)

    def columns(self) -> list[str | None]:
        """Column values, with ``None`` marking empty (unquoted) columns."""
        notes = "".join(f"{note}\n" for note in self.notes)
        return [
            value or None
            for value in (self.description, self.id, self.pin, self.email, notes)
        ]


class SecretsCsvWriter:
    """Render an EntryList as Secrets CSV.

    Example:
        SecretsCsvWriter(vault.entries).save("secrets.csv")
    """

    def __init__(self, entries: EntryList) -> None:
        self._entries = entries

    def save(self, target: str | Path | TextIO) -> None:
        """Write the CSV to a new file or an open text stream.

        Args:
            target: Path of a file to create, or a writable text stream

        Raises:
            FileExistsError: If ``target`` is a path that already exists
        """
        if isinstance(target, (str, Path)):
            # Never overwrite an existing file
            with open(target, "x", encoding="utf-8", newline="") as fh:
                self._write(fh)
        else:
            self._write(target)

    def render(self) -> str:
        """Return the CSV as a string."""
        buffer = io.StringIO(newline="")
        self._write(buffer)
        return buffer.getvalue()

    def _write(self, stream: TextIO) -> None:
        writer = csv.writer(
            stream, quoting=csv.QUOTE_NOTNULL, lineterminator="\n"
        )
        writer.writerow(HEADER)
        for entry in self._entries:
            writer.writerow(self._build_row(entry).columns())
        logger.debug("Wrote %d Secrets CSV rows", len(self._entries))

    @staticmethod
    def _build_row(entry: Entry) -> SecretsRow:
        row = SecretsRow(description=entry.location, pin=entry.secret or "")
        row.add_note(f"Revelation-Type: {entry.kind}")
        if entry.description is not None:
            row.add_note(f"Description: {entry.description}")
        row.add_note(f"Last updated: {entry.last_updated}")
        for field_id, item in entry.fields.items():
            row.add_note(f"{field_id}: {item.value}")
        return row
