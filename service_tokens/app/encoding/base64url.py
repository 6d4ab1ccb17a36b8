"""
Base64url codec used for every JWT segment.
"""

import base64
import binascii
import re
from typing import Union

from shared.errors import InvalidEncodingError

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")
_BASE64URL_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(data: bytes) -> str:
    """Base64 URL-safe encode without padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_decode(data: str) -> bytes:
    """Base64 URL-safe decode; restores padding and rejects foreign characters."""
    if not _BASE64URL_PATTERN.fullmatch(data):
        raise InvalidEncodingError("Invalid base64url string")
    try:
        return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))
    except binascii.Error as e:
        raise InvalidEncodingError(f"Invalid base64url string: {e}") from e


def hex_to_bytes(hex_string: str) -> bytes:
    """Decode an even-length hex string into bytes."""
    if len(hex_string) % 2 == 0 and _HEX_PATTERN.fullmatch(hex_string):
        return bytes.fromhex(hex_string)
    raise InvalidEncodingError("Invalid hex string.", details={"length": len(hex_string)})


def convert_to_base64url(data: Union[str, bytes], encoding: str = "utf8") -> str:
    """
    Encode text or raw bytes as base64url.

    Bytes are encoded directly. Strings are UTF-8 encoded first, unless
    ``encoding="hex"`` in which case they are hex-decoded to bytes.
    """
    if isinstance(data, (bytes, bytearray)):
        return base64url_encode(bytes(data))
    if encoding == "hex":
        return base64url_encode(hex_to_bytes(data))
    return base64url_encode(data.encode("utf-8"))
