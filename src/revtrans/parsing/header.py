"""Revelation vault header parsing.

The header is 12 bytes, followed by the encrypted IV:

    "rvl" 0x00        magic
    1 byte            data version
    1 byte            separator
    3 bytes           application version (one byte per component)
    3 bytes           separator

The published format description does not match real files; this layout
is the one Revelation actually writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from revtrans.exceptions import (
    CorruptedDataError,
    InvalidSignatureError,
    UnsupportedVersionError,
)
from revtrans.security.kdf import DataVersion

logger = logging.getLogger(__name__)

MAGIC = b"rvl\x00"
HEADER_SIZE = 12


@dataclass(frozen=True, slots=True)
class VaultHeader:
    """Parsed Revelation header.

    Attributes:
        magic: The 4 signature bytes
        data_version: Format version, selects key preparation
        app_version: Version of the writing application, e.g. "0.4.11"
    """

    magic: bytes
    data_version: int
    app_version: str


def _read_exact(stream: BinaryIO, n: int, what: str) -> bytes:
    data = stream.read(n)
    if len(data) != n:
        raise CorruptedDataError(f"Unexpected end of file while reading {what}")
    return data


def read_header(stream: BinaryIO) -> VaultHeader:
    """Read and validate the header from the current stream position.

    On success the stream is positioned on the first byte of the encrypted
    IV. Bytes consumed before a failure are not pushed back, so the stream
    must not be reused after an error.

    Args:
        stream: Binary stream positioned at the start of the vault

    Returns:
        The parsed VaultHeader

    Raises:
        InvalidSignatureError: If the magic bytes are missing or wrong
        UnsupportedVersionError: If the data version is not 1 or 2
        CorruptedDataError: If the header is truncated after the magic
    """
    magic = stream.read(len(MAGIC))
    if magic != MAGIC:
        raise InvalidSignatureError()

    data_version = _read_exact(stream, 1, "data version")[0]
    _read_exact(stream, 1, "header separator")
    app_version = ".".join(
        str(b) for b in _read_exact(stream, 3, "application version")
    )

    if data_version not in {v.value for v in DataVersion}:
        raise UnsupportedVersionError(data_version)

    _read_exact(stream, 3, "header separator")

    logger.debug(
        "Read Revelation header: data version %d, app version %s",
        data_version,
        app_version,
    )
    return VaultHeader(magic=magic, data_version=data_version, app_version=app_version)


def is_vault(source: str | Path | BinaryIO) -> bool:
    """Cheaply check whether a file looks like a Revelation vault.

    Only the magic bytes and data version are inspected. A True result does
    not promise the file decodes; False means it certainly cannot.
    """
    if isinstance(source, (str, Path)):
        with open(source, "rb") as fh:
            prefix = fh.read(len(MAGIC) + 1)
    else:
        prefix = source.read(len(MAGIC) + 1)
    if len(prefix) != len(MAGIC) + 1 or prefix[: len(MAGIC)] != MAGIC:
        return False
    return prefix[-1] in {v.value for v in DataVersion}
