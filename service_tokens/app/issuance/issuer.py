"""
Token issuance.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Union

from shared.errors import IssuanceFailedError
from shared.logging import get_logger
from ..clock import Clock, now_millis
from ..signing.algorithms import Key, sign
from ..signing.input import Header, Payload, build_signing_input

logger = get_logger("tokens.issuer")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)

Expiry = Union[int, float, datetime, date, timedelta]


def issue(header: Header, payload: Payload, key: Key) -> str:
    """
    Create a compact JWT ``<header>.<payload>.<signature>``.

    ``key`` has no default: pass ``None`` explicitly to issue an unsecured
    (``alg="none"``) token. Every failure surfaces as IssuanceFailedError with
    the original error chained and kept on ``cause``.
    """
    try:
        signing_input = build_signing_input(header, payload)
        signature = sign(header["alg"], key, signing_input)
    except Exception as e:
        logger.warning("Token issuance failed", error_type=type(e).__name__)
        raise IssuanceFailedError(e) from e

    logger.debug("Token issued", alg=header["alg"], unsecured=not signature)
    return f"{signing_input}.{signature}"


def to_epoch_millis(expiry: Expiry, clock: Clock = now_millis) -> int:
    """
    Normalize an expiration target to epoch milliseconds for ``exp``.

    Numbers are taken as epoch milliseconds. Naive datetimes are treated as
    UTC, dates as midnight UTC, and timedeltas as an offset from now.
    """
    if isinstance(expiry, bool):
        raise TypeError("Expiry must be a number, datetime, date or timedelta")
    if isinstance(expiry, (int, float)):
        return int(expiry)
    if isinstance(expiry, timedelta):
        return clock() + expiry // _MILLISECOND
    if isinstance(expiry, datetime):
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return (expiry - _EPOCH) // _MILLISECOND
    if isinstance(expiry, date):
        midnight = datetime(expiry.year, expiry.month, expiry.day, tzinfo=timezone.utc)
        return (midnight - _EPOCH) // _MILLISECOND
    raise TypeError("Expiry must be a number, datetime, date or timedelta")
