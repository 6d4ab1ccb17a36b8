"""
Unit tests for the base64url and hex codecs.
"""

import pytest

from service_tokens.app.encoding.base64url import (
    base64url_decode,
    base64url_encode,
    convert_to_base64url,
    hex_to_bytes,
)
from shared.errors import InvalidEncodingError


class TestBase64url:
    """Test cases for base64url encoding and decoding."""

    def test_encode_strips_padding(self):
        """Test that padding is removed."""
        assert base64url_encode(b"a") == "YQ"
        assert base64url_encode(b"ab") == "YWI"

    def test_encode_uses_url_safe_alphabet(self):
        """Test that + and / are replaced."""
        encoded = base64url_encode(b"\xfb\xff\xbf")
        assert encoded == "-_-_"

    def test_decode_restores_padding(self):
        """Test decoding of unpadded input."""
        assert base64url_decode("YQ") == b"a"
        assert base64url_decode("-_-_") == b"\xfb\xff\xbf"

    def test_decode_rejects_padding(self):
        """Test that padded input is rejected."""
        with pytest.raises(InvalidEncodingError):
            base64url_decode("YQ==")

    @pytest.mark.parametrize("value", ["ab$c", "a+bc", "a/bc", "Y", "é"])
    def test_decode_rejects_invalid_input(self, value):
        """Test that characters outside the alphabet are rejected."""
        with pytest.raises(InvalidEncodingError):
            base64url_decode(value)


class TestHex:
    """Test cases for hex decoding."""

    def test_hex_to_bytes(self):
        """Test decoding of a valid hex string."""
        assert hex_to_bytes("1a2b") == bytes([0x1A, 0x2B])
        assert hex_to_bytes("FF00") == bytes([0xFF, 0x00])

    @pytest.mark.parametrize("value", ["1a2", "1a2g", "", "1a2b\n"])
    def test_hex_to_bytes_rejects_invalid_input(self, value):
        """Test that odd length and non-hex characters are rejected."""
        with pytest.raises(InvalidEncodingError):
            hex_to_bytes(value)


class TestConvertToBase64url:
    """Test cases for convert_to_base64url."""

    def test_text_is_utf8_encoded(self):
        """Test text input."""
        assert convert_to_base64url('{"alg":"none"}') == "eyJhbGciOiJub25lIn0"
        assert convert_to_base64url("é") == base64url_encode("é".encode("utf-8"))

    def test_bytes_are_encoded_directly(self):
        """Test raw byte input ignores the encoding argument."""
        assert convert_to_base64url(b"\x1a\x2b") == "Gis"
        assert convert_to_base64url(b"\x1a\x2b", encoding="hex") == "Gis"

    def test_hex_mode(self):
        """Test hex input is decoded before encoding."""
        assert convert_to_base64url("1a2b", encoding="hex") == "Gis"

    def test_hex_mode_rejects_invalid_input(self):
        """Test hex mode surfaces InvalidEncodingError."""
        with pytest.raises(InvalidEncodingError):
            convert_to_base64url("1a2", encoding="hex")
