"""
Verification of presented compact JWTs.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from shared.errors import (
    InvalidEncodingError,
    InvalidKeyError,
    InvalidSignatureError,
    InvalidTokenError,
    MalformedTokenError,
    UnsupportedAlgorithmError,
)
from shared.logging import get_logger
from ..clock import Clock, now_millis
from ..encoding.base64url import base64url_decode
from ..signing.algorithms import UNSECURED, Key, sign, signatures_match
from ..signing.input import Header, Payload
from .claims import validate_time_claims as check_time_claims
from .critical import CritHandlers, handle_critical

logger = get_logger("tokens.verifier")


@dataclass(frozen=True)
class VerifiedToken:
    """Outcome of a successful verification."""
    header: Header
    payload: Payload
    algorithm: str

    @property
    def claims(self) -> Optional[Dict[str, Any]]:
        return self.payload if isinstance(self.payload, dict) else None


def _split(token: str) -> Tuple[str, str, str]:
    if not isinstance(token, str):
        raise MalformedTokenError("The JWT must be a string")
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError(
            "The JWT must have exactly 3 parts: header.payload.signature",
            details={"parts": len(parts)}
        )
    return parts[0], parts[1], parts[2]


def _decode_segment(segment: str, name: str) -> str:
    try:
        return base64url_decode(segment).decode("utf-8")
    except (InvalidEncodingError, UnicodeDecodeError) as e:
        raise MalformedTokenError(f"Invalid {name} segment: {e}") from e


def _decode_header(segment: str) -> Header:
    text = _decode_segment(segment, "header")
    try:
        header = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MalformedTokenError(f"The header is not valid JSON: {e}") from e
    if not isinstance(header, dict):
        raise MalformedTokenError("The header must be a JSON object")
    if not isinstance(header.get("alg"), str):
        raise MalformedTokenError("The header 'alg' member must be a string")
    return header


def _decode_payload(segment: str) -> Payload:
    text = _decode_segment(segment, "payload")
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        return text
    return payload if isinstance(payload, dict) else text


def decode_token(token: str) -> Tuple[Header, Payload]:
    """
    Decode header and payload WITHOUT verification.

    For inspection and debugging only; nothing returned here is trusted.
    """
    header_segment, payload_segment, _ = _split(token)
    return _decode_header(header_segment), _decode_payload(payload_segment)


def _check_signature(alg: str, key: Key, signing_input: str, signature: str, allow_unsecured: bool) -> None:
    if alg == UNSECURED and not allow_unsecured:
        raise InvalidSignatureError("Unsecured JWTs are not accepted")
    try:
        expected = sign(alg, key, signing_input)
    except InvalidKeyError as e:
        raise InvalidSignatureError(f"Signature could not be recomputed: {e}") from e
    if not signatures_match(expected, signature):
        raise InvalidSignatureError()


def verify_token(
    token: str,
    key: Key,
    validate_time_claims: bool = True,
    crit_handlers: Optional[CritHandlers] = None,
    *,
    allow_unsecured: bool = False,
    leeway_ms: int = 0,
    clock: Clock = now_millis,
) -> VerifiedToken:
    """
    Verify a compact JWT and return its header and payload.

    The signature is recomputed over the presented ``header.payload``
    segments with the token's own ``alg`` and compared in constant time.
    ``crit`` members are dispatched to ``crit_handlers``; ``exp``/``nbf`` are
    checked only for JSON object payloads and when ``validate_time_claims``
    is set.
    """
    try:
        header_segment, payload_segment, signature = _split(token)
        header = _decode_header(header_segment)
        alg = header["alg"]

        _check_signature(alg, key, f"{header_segment}.{payload_segment}", signature, allow_unsecured)

        payload = _decode_payload(payload_segment)
        handled_header = handle_critical(header, crit_handlers)

        if validate_time_claims and isinstance(payload, dict):
            check_time_claims(payload, clock(), leeway_ms)
    except (InvalidTokenError, UnsupportedAlgorithmError) as e:
        logger.warning("Token verification failed", code=e.code)
        raise

    logger.debug("Token verified", alg=alg)
    return VerifiedToken(header=handled_header, payload=payload, algorithm=alg)


def verify(
    token: str,
    key: Key,
    validate_time_claims: bool = True,
    crit_handlers: Optional[CritHandlers] = None,
    *,
    allow_unsecured: bool = False,
    leeway_ms: int = 0,
    clock: Clock = now_millis,
) -> Payload:
    """Verify a compact JWT and return its claims (or opaque payload string)."""
    return verify_token(
        token,
        key,
        validate_time_claims,
        crit_handlers,
        allow_unsecured=allow_unsecured,
        leeway_ms=leeway_ms,
        clock=clock,
    ).payload
