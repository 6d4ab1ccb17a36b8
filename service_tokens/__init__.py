"""
Token Service package.

Issues and verifies compact, HMAC-signed JSON Web Tokens:

- app.encoding: Base64url and hex codecs for token segments.
- app.signing: Signing input construction and algorithm dispatch.
- app.issuance: Token creation and expiration helpers.
- app.validation: Signature, critical header and time claim checks.
- app.main: FastAPI application exposing issue/verify endpoints.

The core is stateless and performs no IO; keys and handlers are supplied
by the caller on every call.
"""
