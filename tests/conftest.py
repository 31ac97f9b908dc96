"""Shared fixtures: build Revelation vaults in memory.

revtrans itself is decode-only. These helpers encrypt documents the way
Revelation does so the decoder can be tested without binary fixtures.
"""

from __future__ import annotations

import zlib
from collections.abc import Callable
from pathlib import Path

import pytest
from Cryptodome.Cipher import AES

MAGIC = b"rvl\x00"
TEST_PASSWORD = "password"
TEST_IV = bytes(range(16))

EXAMPLE_DOCUMENT = b"""<?xml version="1.0" encoding="utf-8" ?>
<revelationdata version="0.4.11" dataversion="1">
    <entry type="generic">
        <name>Example</name>
        <description></description>
        <updated>1262304000</updated>
        <field id="generic-hostname"></field>
        <field id="generic-username">alice</field>
        <field id="generic-password">hunter2</field>
    </entry>
</revelationdata>
"""

NESTED_DOCUMENT = b"""<?xml version="1.0" encoding="utf-8" ?>
<revelationdata version="0.4.11" dataversion="1">
    <entry type="folder">
        <name>A</name>
        <updated>1262304000</updated>
        <entry type="folder">
            <name>B</name>
            <entry type="website">
                <name>E</name>
                <updated>1262304001</updated>
                <field id="generic-url">https://example.com</field>
            </entry>
        </entry>
        <entry type="email">
            <name>Mail</name>
            <updated>1262304002</updated>
        </entry>
    </entry>
    <entry type="creditcard">
        <name>Card</name>
        <updated>1262304003</updated>
    </entry>
</revelationdata>
"""


def pad(data: bytes) -> bytes:
    """Apply block padding as Revelation does before encryption."""
    padding_len = 16 - (len(data) % 16)
    return data + bytes([padding_len]) * padding_len


def build_header(
    data_version: int = 1,
    app_version: tuple[int, int, int] = (0, 4, 11),
    magic: bytes = MAGIC,
) -> bytes:
    return magic + bytes([data_version, 0, *app_version, 0, 0, 0])


def build_vault(
    document: bytes,
    password: str | bytes = TEST_PASSWORD,
    *,
    iv: bytes = TEST_IV,
    data_version: int = 1,
    app_version: tuple[int, int, int] = (0, 4, 11),
) -> bytes:
    """Compress, pad and encrypt a document into a version 1 vault."""
    if isinstance(password, str):
        password = password.encode("utf-8")
    key = password.ljust(32, b"\x00")
    encrypted_iv = AES.new(key, AES.MODE_ECB).encrypt(iv)
    body = AES.new(key, AES.MODE_CBC, iv=iv).encrypt(pad(zlib.compress(document)))
    return build_header(data_version, app_version) + encrypted_iv + body


@pytest.fixture
def vault_bytes() -> bytes:
    """Vault containing EXAMPLE_DOCUMENT."""
    return build_vault(EXAMPLE_DOCUMENT)


@pytest.fixture
def write_vault(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a vault (or raw bytes) to a temporary file."""

    def _write(data: bytes, name: str = "passwords.rvl") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
