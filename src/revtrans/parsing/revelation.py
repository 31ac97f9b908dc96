"""Revelation vault payload decryption.

This module turns an encrypted Revelation file into its XML document:
1. Header parsing and version check
2. Reading the encrypted IV and body, then releasing the file
3. Key preparation for the header's data version
4. IV decryption (AES-ECB) and body decryption (AES-CBC)
5. Padding removal and zlib decompression

Decrypted data is only ever held in memory. The format has no integrity
check, so a wrong password surfaces as a padding or decompression failure.
"""

from __future__ import annotations

import io
import logging
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from revtrans.exceptions import CorruptedDataError, DecompressionError, IoError
from revtrans.security import (
    BLOCK_SIZE,
    decrypt_iv,
    decrypt_stream,
    derive_key,
    strip_padding,
)

from .header import VaultHeader, read_header

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EncryptedPayload:
    """Raw pieces of a vault file, read before any decryption happens."""

    header: VaultHeader
    encrypted_iv: bytes
    body: bytes


def read_payload(stream: BinaryIO) -> EncryptedPayload:
    """Split a vault stream into header, encrypted IV and encrypted body.

    Raises:
        FormatError: From header parsing
        CorruptedDataError: If the file ends inside the IV
    """
    header = read_header(stream)
    encrypted_iv = stream.read(BLOCK_SIZE)
    if len(encrypted_iv) != BLOCK_SIZE:
        raise CorruptedDataError("Unexpected end of file while reading the IV")
    body = stream.read()
    return EncryptedPayload(header=header, encrypted_iv=encrypted_iv, body=body)


class PayloadDecoder:
    """Lazily decrypt and decompress one Revelation vault.

    The document is decoded on the first call to ``decode()`` and cached;
    later calls neither touch the file nor run the cipher again.

    Example:
        decoder = PayloadDecoder("passwords.rvl", password="secret")
        xml_data = decoder.decode()
    """

    def __init__(self, source: str | Path | bytes, password: bytes | str) -> None:
        """Initialize the decoder.

        Args:
            source: Path to the vault file, or its complete contents
            password: Passphrase used to prepare the key
        """
        self._source = source
        self._password: bytes | str | None = password
        self._header: VaultHeader | None = None
        self._document: bytes | None = None

    @property
    def header(self) -> VaultHeader | None:
        """Header of the vault, available once ``decode()`` has run."""
        return self._header

    def decode(self) -> bytes:
        """Return the decrypted, decompressed XML document.

        Raises:
            IoError: If the file cannot be opened or read
            FormatError: If the header is invalid or truncated
            UnsupportedVersionError: If the data version has no key scheme
            KdfError: If the passphrase is unusable
            CryptoError: If the cipher rejects its input
            PaddingError: If padding removal fails (likely wrong password)
            DecompressionError: If the payload does not inflate (likely wrong
                password)
        """
        if self._document is None:
            self._document = self._decode()
        return self._document

    def clear(self) -> None:
        """Drop the cached document and the stored password."""
        self._document = None
        self._password = None

    def _open(self) -> BinaryIO:
        if isinstance(self._source, (bytes, bytearray)):
            return io.BytesIO(self._source)
        return open(self._source, "rb")

    def _decode(self) -> bytes:
        if self._password is None:
            raise ValueError("Decoder was cleared - create a new one to decode again")

        try:
            with self._open() as stream:
                payload = read_payload(stream)
        except OSError as e:
            raise IoError(
                f"The Revelation file could not be opened for reading: {self._source}"
            ) from e

        self._header = payload.header
        logger.debug("Read %d encrypted payload bytes", len(payload.body))

        with derive_key(self._password, payload.header.data_version) as key:
            iv = decrypt_iv(key.data, payload.encrypted_iv)
            padded = decrypt_stream(key.data, iv, payload.body)

        compressed = strip_padding(padded)
        try:
            document = zlib.decompress(compressed)
        except zlib.error as e:
            raise DecompressionError() from e

        logger.debug("Decompressed document to %d bytes", len(document))
        return document


def decode_vault(path: str | Path, password: bytes | str) -> bytes:
    """Convenience function to decode a vault file into its XML document."""
    return PayloadDecoder(path, password).decode()


def decode_vault_bytes(data: bytes, password: bytes | str) -> bytes:
    """Convenience function to decode in-memory vault contents."""
    return PayloadDecoder(data, password).decode()
