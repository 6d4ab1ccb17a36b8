"""
Signing input construction shared by issuance and verification.
"""

import json
from typing import Any, Dict, Union

from ..encoding.base64url import convert_to_base64url

Header = Dict[str, Any]
Claims = Dict[str, Any]
Payload = Union[Claims, str]


def serialize_json(value: Any) -> str:
    """Compact JSON text; key order follows insertion order."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def build_signing_input(header: Header, payload: Payload) -> str:
    """
    Serialize header and payload into ``<b64url(header)>.<b64url(payload)>``.

    String payloads are used verbatim; anything else is serialized as JSON.
    """
    encoded_header = convert_to_base64url(serialize_json(header))
    payload_text = payload if isinstance(payload, str) else serialize_json(payload)
    return f"{encoded_header}.{convert_to_base64url(payload_text)}"
