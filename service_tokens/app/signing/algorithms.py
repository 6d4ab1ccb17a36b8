"""
Algorithm dispatch for JWS signatures.
"""

import hashlib
import hmac
from typing import Optional, Union

from shared.errors import InvalidKeyError, UnsupportedAlgorithmError
from ..encoding.base64url import base64url_encode

Key = Optional[Union[str, bytes]]

UNSECURED = "none"

_HMAC_DIGESTS = {
    "HS256": hashlib.sha256,
    "HS512": hashlib.sha512,
}

SUPPORTED_ALGORITHMS = frozenset({UNSECURED, *_HMAC_DIGESTS})


def _key_bytes(key: Key) -> bytes:
    if key is None:
        raise InvalidKeyError("A key is required for HMAC algorithms")
    key_bytes = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if not key_bytes:
        raise InvalidKeyError("HMAC key must not be empty")
    return key_bytes


def sign(alg: str, key: Key, message: Union[str, bytes]) -> str:
    """
    Compute the base64url signature of ``message`` for ``alg``.

    ``"none"`` yields an empty signature and ignores the key.
    """
    if alg == UNSECURED:
        return ""
    digestmod = _HMAC_DIGESTS.get(alg) if isinstance(alg, str) else None
    if digestmod is None:
        raise UnsupportedAlgorithmError(alg)
    msg = message.encode("utf-8") if isinstance(message, str) else message
    return base64url_encode(hmac.new(_key_bytes(key), msg, digestmod).digest())


def signatures_match(expected: str, presented: str) -> bool:
    """Timing-safe comparison of two encoded signatures."""
    return hmac.compare_digest(expected.encode("utf-8"), presented.encode("utf-8"))
