"""
Shared error handling for the token service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class TokenError(Exception):
    """Base exception for token issuance and verification."""

    http_status = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidEncodingError(TokenError):
    """Malformed hex or base64url input."""

    def __init__(self, message: str = "Invalid encoding", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_ENCODING", message, details)


class UnsupportedAlgorithmError(TokenError):
    """Unknown `alg` value."""

    def __init__(self, algorithm: Any, details: Optional[Dict[str, Any]] = None):
        self.algorithm = algorithm
        super().__init__(
            "UNSUPPORTED_ALGORITHM",
            f"No matching algorithm: {algorithm!r}",
            {"algorithm": str(algorithm), **(details or {})}
        )


class InvalidKeyError(TokenError):
    """Missing or unusable signing key."""

    def __init__(self, message: str = "Invalid signing key", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_KEY", message, details)


class IssuanceFailedError(TokenError):
    """Wraps any failure raised while creating a token."""

    def __init__(self, cause: Exception):
        self.cause = cause
        cause_code = getattr(cause, "code", type(cause).__name__)
        cause_message = getattr(cause, "message", str(cause))
        super().__init__(
            "ISSUANCE_FAILED",
            f"Failed to create a JWT: {cause_message}",
            {"cause": cause_code}
        )


class InvalidTokenError(TokenError):
    """Base class for presented tokens that must not be trusted."""

    http_status = 401


class MalformedTokenError(InvalidTokenError):
    """Wrong segment count, undecodable segment or unparseable header."""

    def __init__(self, message: str = "Malformed JWT", details: Optional[Dict[str, Any]] = None):
        super().__init__("MALFORMED_TOKEN", message, details)


class InvalidSignatureError(InvalidTokenError):
    """Recomputed signature does not match."""

    def __init__(self, message: str = "Signature mismatch", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_SIGNATURE", message, details)


class UnsupportedCriticalError(InvalidTokenError):
    """A `crit` member has no registered handler."""

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        self.name = name
        super().__init__(
            "UNSUPPORTED_CRITICAL",
            f"Critical header member is not supported: {name}",
            {"member": name, **(details or {})}
        )


class CriticalExtensionRejectedError(InvalidTokenError):
    """A critical extension handler rejected its value."""

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(
            "CRITICAL_EXTENSION_REJECTED",
            f"Critical header member {name} was rejected: {cause}",
            {"member": name, "cause": type(cause).__name__}
        )


class TokenExpiredError(InvalidTokenError):
    """`exp` has passed."""

    def __init__(self, expired_at: float, now: float):
        self.expired_at = expired_at
        super().__init__(
            "TOKEN_EXPIRED",
            "The JWT is expired",
            {"exp": expired_at, "now": now}
        )


class TokenNotYetValidError(InvalidTokenError):
    """`nbf` is still in the future."""

    def __init__(self, not_before: float, now: float):
        self.not_before = not_before
        super().__init__(
            "TOKEN_NOT_YET_VALID",
            "The JWT is not yet valid",
            {"nbf": not_before, "now": now}
        )
