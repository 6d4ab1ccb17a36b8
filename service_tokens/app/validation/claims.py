"""
Time-bounded claim validation.
"""

import math
from typing import Any, Dict

from shared.errors import MalformedTokenError, TokenExpiredError, TokenNotYetValidError


def _numeric_claim(claims: Dict[str, Any], name: str) -> float:
    value = claims[name]
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise MalformedTokenError(
            f"The '{name}' claim must be a finite number",
            details={"claim": name}
        )
    return value


def validate_time_claims(claims: Dict[str, Any], now: int, leeway_ms: int = 0) -> None:
    """Check `exp` and `nbf` (epoch milliseconds) against ``now``."""
    if "exp" in claims:
        exp = _numeric_claim(claims, "exp")
        if now >= exp + leeway_ms:
            raise TokenExpiredError(exp, now)

    if "nbf" in claims:
        nbf = _numeric_claim(claims, "nbf")
        if now < nbf - leeway_ms:
            raise TokenNotYetValidError(nbf, now)
