"""AES primitives used to open Revelation vaults.

Revelation encrypts with Rijndael using a 128-bit block and the 32-byte
prepared key:
- the 16-byte IV is stored ECB-encrypted right after the header
- the compressed document is CBC-encrypted with that IV and block padded

Neither mode authenticates, so a wrong key never fails here. It shows up
later as a padding or decompression error.
"""

from __future__ import annotations

import logging

from Cryptodome.Cipher import AES

from revtrans.exceptions import CryptoError, PaddingError

logger = logging.getLogger(__name__)

BLOCK_SIZE = AES.block_size


def decrypt_iv(key: bytes, ciphertext: bytes) -> bytes:
    """Decrypt the single-block IV in ECB mode.

    Args:
        key: 32-byte cipher key
        ciphertext: Exactly 16 encrypted bytes

    Returns:
        Raw 16-byte IV (no padding interpretation)

    Raises:
        CryptoError: If the key or block size is invalid
    """
    if len(ciphertext) != BLOCK_SIZE:
        raise CryptoError(
            f"IV must be {BLOCK_SIZE} bytes, got {len(ciphertext)}"
        )
    try:
        return AES.new(key, AES.MODE_ECB).decrypt(ciphertext)
    except (ValueError, TypeError) as e:
        raise CryptoError("IV decryption failed") from e


def decrypt_stream(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    """Decrypt the vault body in CBC mode.

    The body is consumed as whole 16-byte blocks. A trailing partial block
    is rejected rather than silently dropped.

    Args:
        key: 32-byte cipher key
        iv: 16-byte IV returned by ``decrypt_iv``
        ciphertext: Everything after the encrypted IV

    Returns:
        Padded, compressed plaintext

    Raises:
        CryptoError: If the ciphertext is not block aligned or the cipher
            rejects its parameters
    """
    if len(ciphertext) % BLOCK_SIZE:
        raise CryptoError(
            f"Encrypted payload length {len(ciphertext)} is not a multiple "
            f"of the {BLOCK_SIZE}-byte block size"
        )
    if not ciphertext:
        return b""
    try:
        cipher = AES.new(key, AES.MODE_CBC, iv=iv)
        plaintext = cipher.decrypt(ciphertext)
    except (ValueError, TypeError) as e:
        raise CryptoError("Payload decryption failed") from e
    logger.debug("Decrypted %d payload blocks", len(ciphertext) // BLOCK_SIZE)
    return plaintext


def strip_padding(data: bytes) -> bytes:
    """Remove trailing block padding.

    The value of the last byte is the number of bytes to drop. The padding
    bytes themselves are not checked, matching what Revelation does.

    Raises:
        PaddingError: If the buffer is empty or the length is 0 or larger
            than the buffer
    """
    if not data:
        raise PaddingError("Decrypted payload is empty - wrong password?")
    padding_len = data[-1]
    if padding_len == 0 or padding_len > len(data):
        raise PaddingError()
    return data[:-padding_len]
