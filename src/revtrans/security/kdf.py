"""Key preparation for Revelation vaults.

Each Revelation data version prepares the AES key from the passphrase in
its own way. The header's data version selects a strategy from a closed
table; versions without a known algorithm fail instead of guessing.

Version 1 simply NUL-pads the passphrase to 32 bytes. This is weak, but it
is what the file format dictates and must be reproduced exactly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum

from revtrans.exceptions import KdfError, UnsupportedVersionError

from .memory import SecureBytes

logger = logging.getLogger(__name__)

KEY_SIZE = 32


class DataVersion(IntEnum):
    """Revelation data versions recognized in the vault header."""

    V1 = 1
    V2 = 2


def _encode_password(password: bytes | str) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def derive_key_v1(password: bytes | str) -> SecureBytes:
    """Right-pad the passphrase with NUL bytes to exactly 32 bytes.

    Args:
        password: Raw passphrase (``str`` is UTF-8 encoded)

    Returns:
        32-byte key wrapped in SecureBytes

    Raises:
        KdfError: If the passphrase is longer than 32 bytes
    """
    raw = bytearray(_encode_password(password))
    try:
        if len(raw) > KEY_SIZE:
            raise KdfError(
                f"Passphrase is {len(raw)} bytes long; "
                f"version 1 vaults support at most {KEY_SIZE} bytes"
            )
        return SecureBytes(raw.ljust(KEY_SIZE, b"\x00"))
    finally:
        for i in range(len(raw)):
            raw[i] = 0


_DERIVERS: dict[DataVersion, Callable[[bytes | str], SecureBytes]] = {
    DataVersion.V1: derive_key_v1,
}


def derive_key(password: bytes | str, version: int) -> SecureBytes:
    """Derive the cipher key for the given data version.

    Args:
        password: Raw passphrase
        version: Data version from the vault header

    Returns:
        32-byte key wrapped in SecureBytes

    Raises:
        UnsupportedVersionError: If no derivation is known for the version
        KdfError: If the passphrase is unusable for the version
    """
    try:
        deriver = _DERIVERS[DataVersion(version)]
    except (ValueError, KeyError):
        raise UnsupportedVersionError(version) from None
    logger.debug("Deriving key for data version %d", version)
    return deriver(password)
