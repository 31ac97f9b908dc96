"""Revelation binary format parsing.

This module handles low-level binary format operations:
- Header parsing and validation
- Payload decryption and decompression
"""

from .header import HEADER_SIZE, MAGIC, VaultHeader, is_vault, read_header
from .revelation import (
    EncryptedPayload,
    PayloadDecoder,
    decode_vault,
    decode_vault_bytes,
    read_payload,
)

__all__ = [
    # Header
    "HEADER_SIZE",
    "MAGIC",
    "VaultHeader",
    "is_vault",
    "read_header",
    # Payload
    "EncryptedPayload",
    "PayloadDecoder",
    "decode_vault",
    "decode_vault_bytes",
    "read_payload",
]
