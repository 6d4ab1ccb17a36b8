"""
Dispatch of `crit` (critical extension) header members.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from shared.errors import (
    CriticalExtensionRejectedError,
    MalformedTokenError,
    UnsupportedCriticalError,
)

CritHandler = Callable[[Any], Any]
CritHandlers = Mapping[str, CritHandler]


def handle_critical(header: Dict[str, Any], crit_handlers: Optional[CritHandlers] = None) -> Dict[str, Any]:
    """
    Run the handler registered for each member named in ``header["crit"]``.

    Returns a copy of the header where each critical member is replaced by
    its handler's return value. The header passed in is left untouched.
    """
    if "crit" not in header:
        return dict(header)

    crit = header["crit"]
    if not isinstance(crit, list) or not crit or not all(isinstance(name, str) for name in crit):
        raise MalformedTokenError("The 'crit' header member must be a non-empty list of strings")

    handlers = crit_handlers or {}
    handled = dict(header)
    for name in crit:
        if name not in header:
            raise MalformedTokenError(
                f"Critical header member is missing: {name}",
                details={"member": name}
            )
        handler = handlers.get(name)
        if handler is None:
            raise UnsupportedCriticalError(name)
        try:
            handled[name] = handler(header[name])
        except Exception as e:
            raise CriticalExtensionRejectedError(name, e) from e

    return handled
