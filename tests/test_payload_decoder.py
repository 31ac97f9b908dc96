"""Tests for the vault decoding pipeline."""

import os
import zlib
from unittest.mock import patch

import pytest
from conftest import (
    EXAMPLE_DOCUMENT,
    TEST_IV,
    build_header,
    build_vault,
    pad,
)
from Cryptodome.Cipher import AES

from revtrans import PayloadDecoder, decode_vault, decode_vault_bytes
from revtrans.exceptions import (
    CorruptedDataError,
    CryptoError,
    DecompressionError,
    DecryptionError,
    InvalidSignatureError,
    IoError,
    KdfError,
    UnsupportedVersionError,
)
from revtrans.security import decrypt_stream


class TestRoundTrip:
    """Tests that encrypted documents decode to the original bytes."""

    @pytest.mark.parametrize(
        "document",
        [
            EXAMPLE_DOCUMENT,
            b"",
            b"x",
            b"exactly sixteen!",
            os.urandom(4096),
        ],
    )
    def test_document_roundtrip(self, document: bytes) -> None:
        """Test that decoding returns the exact document bytes."""
        assert decode_vault_bytes(build_vault(document), "password") == document

    def test_roundtrip_from_file(self, write_vault) -> None:
        """Test decoding from a path."""
        path = write_vault(build_vault(EXAMPLE_DOCUMENT, "hunter2"))

        assert decode_vault(path, "hunter2") == EXAMPLE_DOCUMENT
        assert decode_vault(str(path), b"hunter2") == EXAMPLE_DOCUMENT

    def test_header_exposed_after_decode(self, vault_bytes: bytes) -> None:
        """Test that the decoder keeps the parsed header."""
        decoder = PayloadDecoder(vault_bytes, "password")
        assert decoder.header is None

        decoder.decode()

        assert decoder.header is not None
        assert decoder.header.data_version == 1
        assert decoder.header.app_version == "0.4.11"

    def test_iv_is_decrypted_not_raw(self) -> None:
        """Test that the stored IV is ECB-decrypted before CBC use."""
        key = b"password".ljust(32, b"\x00")
        body = AES.new(key, AES.MODE_CBC, iv=TEST_IV).encrypt(
            pad(zlib.compress(b"<x/>"))
        )
        # IV stored in plaintext instead of encrypted
        data = build_header() + TEST_IV + body

        with pytest.raises(DecryptionError):
            decode_vault_bytes(data, "password")


class TestMemoization:
    """Tests that decoding happens at most once per decoder."""

    def test_second_decode_uses_cache(self, write_vault) -> None:
        """Test that the file is not read again."""
        path = write_vault(build_vault(EXAMPLE_DOCUMENT))
        decoder = PayloadDecoder(path, "password")

        first = decoder.decode()
        path.unlink()
        second = decoder.decode()

        assert first is second

    def test_cipher_runs_once(self, vault_bytes: bytes) -> None:
        """Test that the CBC stage is not repeated."""
        decoder = PayloadDecoder(vault_bytes, "password")
        with patch(
            "revtrans.parsing.revelation.decrypt_stream",
            wraps=decrypt_stream,
        ) as spy:
            decoder.decode()
            decoder.decode()

        assert spy.call_count == 1

    def test_clear_drops_cache(self, vault_bytes: bytes) -> None:
        """Test that a cleared decoder cannot decode again."""
        decoder = PayloadDecoder(vault_bytes, "password")
        decoder.decode()
        decoder.clear()

        with pytest.raises(ValueError, match="cleared"):
            decoder.decode()


class TestFailures:
    """Tests for error reporting of each pipeline stage."""

    def test_missing_file(self, tmp_path) -> None:
        """Test that unreadable files raise IoError."""
        with pytest.raises(IoError, match="could not be opened"):
            decode_vault(tmp_path / "missing.rvl", "password")

    def test_directory(self, tmp_path) -> None:
        """Test that a directory path raises IoError."""
        with pytest.raises(IoError):
            decode_vault(tmp_path, "password")

    def test_not_a_vault(self) -> None:
        """Test that foreign data is rejected at the header."""
        with pytest.raises(InvalidSignatureError):
            decode_vault_bytes(b"<revelationdata/>", "password")

    def test_empty_file(self, write_vault) -> None:
        """Test that an empty file is rejected at the header."""
        with pytest.raises(InvalidSignatureError):
            decode_vault(write_vault(b""), "password")

    def test_truncated_iv(self) -> None:
        """Test that a file ending inside the IV is corrupted."""
        with pytest.raises(CorruptedDataError):
            decode_vault_bytes(build_header() + b"\x00" * 7, "password")

    def test_version_two_rejected_before_cipher(self) -> None:
        """Test that version 2 fails before any decryption is attempted."""
        data = build_vault(EXAMPLE_DOCUMENT, data_version=2)

        with patch("revtrans.parsing.revelation.decrypt_iv") as iv_spy:
            with pytest.raises(UnsupportedVersionError):
                decode_vault_bytes(data, "password")

        iv_spy.assert_not_called()

    def test_passphrase_too_long(self, vault_bytes: bytes) -> None:
        """Test that overlong passphrases fail during key preparation."""
        with pytest.raises(KdfError):
            decode_vault_bytes(vault_bytes, "p" * 40)

    def test_unaligned_body(self, vault_bytes: bytes) -> None:
        """Test that a body with a partial final block is rejected."""
        with pytest.raises(CryptoError, match="block size"):
            decode_vault_bytes(vault_bytes + b"\x01\x02\x03", "password")

    def test_empty_body(self) -> None:
        """Test that a vault without body fails padding removal."""
        key = b"password".ljust(32, b"\x00")
        data = build_header() + AES.new(key, AES.MODE_ECB).encrypt(TEST_IV)

        with pytest.raises(DecryptionError):
            decode_vault_bytes(data, "password")

    def test_wrong_password(self, vault_bytes: bytes) -> None:
        """Test that a wrong password surfaces as a decryption failure."""
        with pytest.raises(DecryptionError, match="[Ww]rong password"):
            decode_vault_bytes(vault_bytes, "not the password")

    def test_garbage_payload_is_decompression_error(self) -> None:
        """Test that a correctly padded non-zlib payload fails to inflate."""
        key = b"password".ljust(32, b"\x00")
        body = AES.new(key, AES.MODE_CBC, iv=TEST_IV).encrypt(pad(b"not zlib data"))
        data = build_header() + AES.new(key, AES.MODE_ECB).encrypt(TEST_IV) + body

        with pytest.raises(DecompressionError, match="Wrong password"):
            decode_vault_bytes(data, "password")
