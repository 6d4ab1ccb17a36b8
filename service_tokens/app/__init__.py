"""
Public surface of the token core.
"""

from .issuance.issuer import issue, to_epoch_millis
from .validation.verifier import VerifiedToken, decode_token, verify, verify_token

__all__ = [
    "issue",
    "to_epoch_millis",
    "verify",
    "verify_token",
    "decode_token",
    "VerifiedToken",
]
