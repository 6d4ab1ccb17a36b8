"""
Signing package.

Builds the ``header.payload`` signing input and maps `alg` values to MAC
computations. Issuance and verification both go through here so the bytes
that are signed are produced in exactly one place.
"""
