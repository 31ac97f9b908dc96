"""Custom exception hierarchy for revtrans.

All exceptions inherit from RevtransError so callers can catch every
library failure in one place.

Exception Hierarchy:
    RevtransError (base)
    ├── FormatError
    │   ├── InvalidSignatureError
    │   ├── CorruptedDataError
    │   └── VersionError
    │       └── UnsupportedVersionError
    ├── IoError
    ├── CryptoError
    │   ├── KdfError
    │   └── DecryptionError
    │       ├── PaddingError
    │       └── DecompressionError
    └── DocumentError
        ├── InvalidDocumentError
        ├── MissingTypeError
        ├── MissingNameError
        ├── MissingTimestampError
        └── MissingFieldIdError

Security Note:
    Messages never include passphrases, key material or secret field values.
    Document errors carry folder paths and entry names only.
"""

from __future__ import annotations

from collections.abc import Sequence


class RevtransError(Exception):
    """Base exception for all revtrans errors."""


# --- Format Errors ---


class FormatError(RevtransError):
    """The input is not a well-formed Revelation vault."""


class InvalidSignatureError(FormatError):
    """The file does not start with the Revelation magic bytes."""

    def __init__(self, message: str = "The given file is not a Revelation password file") -> None:
        super().__init__(message)


class CorruptedDataError(FormatError):
    """The vault file is truncated or structurally damaged."""


class VersionError(FormatError):
    """The vault declares a data version this library cannot handle."""


class UnsupportedVersionError(VersionError):
    """Unsupported Revelation data version."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"Unsupported Revelation data version: {version}")


# --- I/O Errors ---


class IoError(RevtransError):
    """The vault file could not be opened or read."""


# --- Crypto Errors ---


class CryptoError(RevtransError):
    """Error in a cipher or key preparation step."""


class KdfError(CryptoError):
    """The passphrase cannot be turned into a cipher key."""


class DecryptionError(CryptoError):
    """Decrypted data is unusable.

    The Revelation format carries no authentication tag, so a wrong
    passphrase silently decrypts to noise. That noise is only noticed when
    padding removal or decompression fails, which is why every subclass
    hints at the password.
    """

    def __init__(self, message: str = "Decryption failed - wrong password?") -> None:
        super().__init__(message)


class PaddingError(DecryptionError):
    """The trailing padding length is impossible for the buffer."""

    def __init__(
        self, message: str = "Invalid padding in decrypted data - wrong password?"
    ) -> None:
        super().__init__(message)


class DecompressionError(DecryptionError):
    """The decrypted payload is not a valid zlib stream."""

    def __init__(
        self,
        message: str = (
            "The Revelation file could not be decrypted/decompressed correctly. "
            "Wrong password?"
        ),
    ) -> None:
        super().__init__(message)


# --- Document Errors ---


def format_location(folder_path: Sequence[str], name: str | None = None) -> str:
    """Render a folder path (and optional entry name) as ``/a/b/name``."""
    parts = list(folder_path)
    if name is not None:
        parts.append(name)
    return "/" + "/".join(parts)


class DocumentError(RevtransError):
    """The decoded XML document violates the Revelation structure.

    Attributes:
        folder_path: Folder names leading to the offending node
        entry_name: Name of the entry being processed, if known
    """

    def __init__(
        self,
        message: str,
        folder_path: Sequence[str] = (),
        entry_name: str | None = None,
    ) -> None:
        self.folder_path = list(folder_path)
        self.entry_name = entry_name
        super().__init__(message)


class InvalidDocumentError(DocumentError):
    """Malformed or forbidden XML, or an unexpected document layout."""


class MissingTypeError(DocumentError):
    """An ``entry`` node has no ``type`` attribute."""

    def __init__(self, folder_path: Sequence[str]) -> None:
        super().__init__(
            f"Untyped entry detected in: {format_location(folder_path)}",
            folder_path,
        )


class MissingNameError(DocumentError):
    """A folder or entry node has no ``name`` child."""

    def __init__(self, folder_path: Sequence[str], *, folder: bool = False) -> None:
        what = "Folder" if folder else "Entry"
        super().__init__(
            f"{what} without name detected in: {format_location(folder_path)}",
            folder_path,
        )


class MissingTimestampError(DocumentError):
    """An entry node has no ``updated`` child."""

    def __init__(self, folder_path: Sequence[str], entry_name: str) -> None:
        super().__init__(
            "Entry without update timestamp detected: "
            f"{format_location(folder_path, entry_name)}",
            folder_path,
            entry_name,
        )


class MissingFieldIdError(DocumentError):
    """A ``field`` node has no ``id`` attribute."""

    def __init__(self, folder_path: Sequence[str], entry_name: str) -> None:
        super().__init__(
            f"Untyped field detected in: {format_location(folder_path, entry_name)}",
            folder_path,
            entry_name,
        )
