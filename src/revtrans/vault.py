"""High-level Vault API for Revelation files.

This module provides the main interface for reading Revelation password
files:
- Opening and decrypting encrypted vaults
- Reading plain XML exports
- Handing the recovered entries to writers
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from .document import VaultDocumentParser
from .models import EntryList
from .parsing import PayloadDecoder, VaultHeader


class Vault:
    """Recovered contents of a Revelation password file.

    Example usage:
        with Vault.open("passwords.rvl", password="secret") as vault:
            for entry in vault.entries:
                print(entry.location, entry.secret)
    """

    def __init__(
        self,
        entries: EntryList,
        header: VaultHeader | None = None,
        decoder: PayloadDecoder | None = None,
    ) -> None:
        """Initialize vault.

        Usually you should use Vault.open() or Vault.open_plain() instead.

        Args:
            entries: Parsed entries
            header: Vault header (None for plain exports)
            decoder: Decoder holding the cached document, if any
        """
        self._entries = entries
        self._header = header
        self._decoder = decoder

    def __enter__(self) -> Vault:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager, dropping cached plaintext and password."""
        self.close()

    def close(self) -> None:
        """Release the decoded document and the stored password.

        The parsed entries stay available; they are what the caller asked
        for.
        """
        if self._decoder is not None:
            self._decoder.clear()
            self._decoder = None

    @property
    def entries(self) -> EntryList:
        """Get the recovered entries."""
        return self._entries

    @property
    def header(self) -> VaultHeader | None:
        """Get the vault header (None for plain exports)."""
        return self._header

    # --- Opening vaults ---

    @classmethod
    def open(cls, filepath: str | Path, password: bytes | str) -> Vault:
        """Open and decrypt a Revelation vault file.

        Args:
            filepath: Path to the vault file
            password: Vault passphrase

        Returns:
            Vault instance

        Raises:
            IoError: If the file cannot be read
            FormatError: If the file is not a supported Revelation vault
            DecryptionError: If the password is most likely wrong
            DocumentError: If the decrypted document is malformed
        """
        return cls._from_decoder(PayloadDecoder(Path(filepath), password))

    @classmethod
    def open_bytes(cls, data: bytes, password: bytes | str) -> Vault:
        """Open a Revelation vault from its raw contents."""
        return cls._from_decoder(PayloadDecoder(data, password))

    @classmethod
    def open_plain(cls, filepath: str | Path) -> Vault:
        """Read a plain XML export written by Revelation.

        Raises:
            IoError: If the file cannot be read
            DocumentError: If the document is malformed
        """
        return cls(VaultDocumentParser().load_file(filepath))

    @classmethod
    def _from_decoder(cls, decoder: PayloadDecoder) -> Vault:
        entries = VaultDocumentParser().load(decoder.decode())
        return cls(entries, header=decoder.header, decoder=decoder)

    def __str__(self) -> str:
        version = self._header.app_version if self._header else "plain"
        return f"Vault: {len(self._entries)} entries (Revelation {version})"
