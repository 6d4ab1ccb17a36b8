"""
Token validation package.

Verifies presented tokens:

- Splitting and decoding the three segments.
- Recomputing the signature and comparing it in constant time.
- Dispatching `crit` header members to caller-supplied handlers.
- Checking `exp` and `nbf` against the clock.
"""
