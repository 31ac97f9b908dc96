"""revtrans - Recover password entries from Revelation vault files.

This library decrypts the password files written by the Revelation password
manager and turns them into plain Python records. Decrypted data is kept in
memory only; nothing is written to disk unless a writer is asked to.

Example:
    from revtrans import Vault

    with Vault.open("passwords.rvl", password="secret") as vault:
        for entry in vault.entries:
            print(entry.location, entry.secret)
"""

__version__ = "0.1.0"

from .document import EntryType, FieldId, VaultDocumentParser
from .exceptions import (
    CorruptedDataError,
    CryptoError,
    DecompressionError,
    DecryptionError,
    DocumentError,
    FormatError,
    InvalidDocumentError,
    InvalidSignatureError,
    IoError,
    KdfError,
    MissingFieldIdError,
    MissingNameError,
    MissingTimestampError,
    MissingTypeError,
    PaddingError,
    RevtransError,
    UnsupportedVersionError,
    VersionError,
)
from .models import SECRET_FIELD_ID, Entry, EntryList, Field
from .parsing import PayloadDecoder, VaultHeader, decode_vault, decode_vault_bytes
from .vault import Vault
from .writers import SecretsCsvWriter

__all__ = [
    # Core classes
    "Entry",
    "EntryList",
    "EntryType",
    "Field",
    "FieldId",
    "PayloadDecoder",
    "SECRET_FIELD_ID",
    "SecretsCsvWriter",
    "Vault",
    "VaultDocumentParser",
    "VaultHeader",
    "decode_vault",
    "decode_vault_bytes",
    # Exceptions
    "RevtransError",
    "FormatError",
    "InvalidSignatureError",
    "CorruptedDataError",
    "VersionError",
    "UnsupportedVersionError",
    "IoError",
    "CryptoError",
    "KdfError",
    "DecryptionError",
    "PaddingError",
    "DecompressionError",
    "DocumentError",
    "InvalidDocumentError",
    "MissingTypeError",
    "MissingNameError",
    "MissingTimestampError",
    "MissingFieldIdError",
]
