"""Security-critical components for revtrans.

This module contains all key-handling code:
- Secure memory handling (SecureBytes)
- Version-specific key preparation
- AES-ECB/CBC decryption and padding removal

All code in this module should be audited carefully.
"""

from .crypto import BLOCK_SIZE, decrypt_iv, decrypt_stream, strip_padding
from .kdf import KEY_SIZE, DataVersion, derive_key, derive_key_v1
from .memory import SecureBytes

__all__ = [
    # Memory
    "SecureBytes",
    # Crypto
    "BLOCK_SIZE",
    "decrypt_iv",
    "decrypt_stream",
    "strip_padding",
    # KDF
    "KEY_SIZE",
    "DataVersion",
    "derive_key",
    "derive_key_v1",
]
