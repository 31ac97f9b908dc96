"""Revelation XML document parsing.

A decoded vault (or a plain export) is an XML tree of ``entry`` nodes:

    <revelationdata>
        <entry type="folder">
            <name>Work</name>
            <entry type="generic">
                <name>Mail</name>
                <description>...</description>
                <updated>1262304000</updated>
                <field id="generic-username">me</field>
                <field id="generic-password">secret</field>
            </entry>
        </entry>
    </revelationdata>

Folders nest arbitrarily deep. The walk keeps its own stack of child
iterators instead of recursing, so hostile nesting depth cannot exhaust the
interpreter stack.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import Enum
from pathlib import Path
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from .exceptions import (
    InvalidDocumentError,
    IoError,
    MissingFieldIdError,
    MissingNameError,
    MissingTimestampError,
    MissingTypeError,
    format_location,
)
from .models import SECRET_FIELD_ID, Entry, EntryList, Field

logger = logging.getLogger(__name__)

ROOT_TAG = "revelationdata"


class EntryType(str, Enum):
    """Entry types with dedicated handling. Other types use the default."""

    FOLDER = "folder"


class FieldId(str, Enum):
    """Field ids with dedicated handling. Other ids use the default."""

    PASSWORD = SECRET_FIELD_ID


def _text(elem: Element) -> str:
    """Return the full text content of an element, like DOM nodeValue."""
    return "".join(elem.itertext())


class VaultDocumentParser:
    """Walk a Revelation XML document into an EntryList.

    The parser fails on the first structural violation; there is no
    partial result. All walk state is reset per ``load()`` call, so one
    instance can parse many documents.

    Example:
        parser = VaultDocumentParser()
        entries = parser.load(xml_data)
    """

    def __init__(self) -> None:
        self._folders: list[str] = []
        self._entries = EntryList()
        self._current: Entry | None = None

        self._entry_handlers: dict[
            str, Callable[[Element, str], Iterator[Element] | None]
        ] = {
            EntryType.FOLDER.value: self._visit_folder,
        }
        self._field_handlers: dict[str, Callable[[Element, str], None]] = {
            FieldId.PASSWORD.value: self._visit_secret,
        }

    @property
    def folder_path(self) -> list[str]:
        """Folder stack of the walk in progress (empty when idle)."""
        return list(self._folders)

    def load(self, document: bytes | str) -> EntryList:
        """Parse a document into entries.

        Args:
            document: XML document as bytes or text

        Returns:
            EntryList in document order

        Raises:
            InvalidDocumentError: If the XML is malformed or not a Revelation
                document
            MissingTypeError: If an entry node has no type
            MissingNameError: If a folder or entry has no name
            MissingTimestampError: If an entry has no updated timestamp
            MissingFieldIdError: If a field has no id
        """
        root = self._parse_xml(document)

        self._folders = []
        self._entries = EntryList()
        self._current = None
        try:
            self._walk(root)
        finally:
            self._folders = []
            self._current = None

        logger.debug("Parsed %d entries", len(self._entries))
        return self._entries

    def load_file(self, path: str | Path) -> EntryList:
        """Parse a plain (unencrypted) Revelation XML export.

        Raises:
            IoError: If the file cannot be read
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise IoError(f"The input file '{path}' could not be opened for reading") from e
        return self.load(data)

    @staticmethod
    def _parse_xml(document: bytes | str) -> Element:
        try:
            root = DefusedET.fromstring(document)
        except DefusedET.ParseError as e:
            raise InvalidDocumentError(f"The Revelation XML data seems to be invalid: {e}") from e
        except DefusedXmlException as e:
            raise InvalidDocumentError(
                f"The Revelation XML data uses forbidden constructs: {e}"
            ) from e
        if root.tag != ROOT_TAG:
            raise InvalidDocumentError(
                f"Expected <{ROOT_TAG}> root element, found <{root.tag}>"
            )
        return root

    def _walk(self, root: Element) -> None:
        # Each frame iterates the child entries of the root or of one folder.
        # Every frame above the root corresponds to one pushed folder name.
        frames: list[Iterator[Element]] = [iter(root.findall("entry"))]
        while frames:
            node = next(frames[-1], None)
            if node is None:
                frames.pop()
                if frames:
                    self._folders.pop()
                continue

            kind = node.get("type")
            if kind is None:
                raise MissingTypeError(self._folders)

            handler = self._entry_handlers.get(kind, self._visit_entry_default)
            children = handler(node, kind)
            if children is not None:
                frames.append(children)

    def _visit_folder(self, node: Element, kind: str) -> Iterator[Element]:
        name_elem = node.find("name")
        if name_elem is None:
            raise MissingNameError(self._folders, folder=True)
        self._folders.append(_text(name_elem))
        return iter(node.findall("entry"))

    def _visit_entry_default(self, node: Element, kind: str) -> None:
        name_elem = node.find("name")
        if name_elem is None:
            raise MissingNameError(self._folders)
        name = _text(name_elem)

        updated_elem = node.find("updated")
        if updated_elem is None:
            raise MissingTimestampError(self._folders, name)
        try:
            last_updated = int(_text(updated_elem).strip())
        except ValueError:
            raise InvalidDocumentError(
                "Entry with invalid update timestamp detected: "
                f"{format_location(self._folders, name)}",
                self._folders,
                name,
            ) from None

        self._current = Entry(
            folder_path=list(self._folders),
            name=name,
            kind=kind,
            last_updated=last_updated,
        )

        description_elem = node.find("description")
        if description_elem is not None:
            self._current.description = _text(description_elem)

        for field_elem in node.findall("field"):
            self._visit_field(field_elem)

        self._entries.add_entry(self._current)
        self._current = None

    def _visit_field(self, node: Element) -> None:
        assert self._current is not None
        field_id = node.get("id")
        if field_id is None:
            raise MissingFieldIdError(self._folders, self._current.name)
        handler = self._field_handlers.get(field_id, self._visit_field_default)
        handler(node, field_id)

    def _visit_field_default(self, node: Element, field_id: str) -> None:
        assert self._current is not None
        self._current.add_field(Field(id=field_id, value=_text(node)))

    def _visit_secret(self, node: Element, field_id: str) -> None:
        assert self._current is not None
        self._current.secret = _text(node)
