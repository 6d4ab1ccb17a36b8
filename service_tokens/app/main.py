"""
Token service exposing JWT issuance and verification over HTTP.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from shared.errors import InvalidTokenError, IssuanceFailedError, UnsupportedAlgorithmError
from .issuance.issuer import issue
from .signing.algorithms import UNSECURED
from .validation.verifier import verify_token


class TokenIssueRequest(BaseModel):
    """Request model for token issuance."""
    header: Dict[str, Any] = Field(default_factory=dict)
    payload: Union[Dict[str, Any], str]


class TokenIssueResponse(BaseModel):
    """Response model for token issuance."""
    token: str
    algorithm: str


class TokenVerificationRequest(BaseModel):
    """Request model for token verification."""
    token: str
    validate_time_claims: Optional[bool] = None


class TokenVerificationResponse(BaseModel):
    """Response model for token verification."""
    valid: bool
    header: Optional[Dict[str, Any]] = None
    payload: Optional[Union[Dict[str, Any], str]] = None
    code: Optional[str] = None
    error: Optional[str] = None


class TokenService(BaseService):
    """Token service implementation."""

    def __init__(self, config: ServiceConfig = None):
        super().__init__("tokens", 8020, config or get_config("tokens", 8020))
        self._setup_token_routes()

    @property
    def signing_key(self) -> Optional[str]:
        secret = self.config.signing_key
        return secret.get_secret_value() if secret is not None else None

    def _setup_token_routes(self):
        """Set up token-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "tokens",
                "message": "JWT issuance and verification",
                "version": "1.0.0"
            }

        @self.app.post("/tokens/issue", response_model=TokenIssueResponse)
        async def issue_token(request: TokenIssueRequest):
            """Issue a token signed with the configured key."""
            header = {"alg": self.config.default_algorithm, **request.header}
            if header["alg"] == UNSECURED and not self.config.allow_unsecured:
                raise IssuanceFailedError(
                    UnsupportedAlgorithmError(UNSECURED, details={"reason": "unsecured tokens are disabled"})
                )
            token = issue(header, request.payload, self.signing_key)
            self.metrics.record_token_issued(header["alg"])
            return TokenIssueResponse(token=token, algorithm=header["alg"])

        @self.app.post("/tokens/verify", response_model=TokenVerificationResponse)
        async def verify(request: TokenVerificationRequest):
            """Token verification endpoint."""
            validate_time_claims = request.validate_time_claims
            if validate_time_claims is None:
                validate_time_claims = self.config.validate_time_claims

            try:
                verified = verify_token(
                    request.token,
                    self.signing_key,
                    validate_time_claims,
                    allow_unsecured=self.config.allow_unsecured,
                    leeway_ms=self.config.leeway_ms,
                )
            except (InvalidTokenError, UnsupportedAlgorithmError) as e:
                self.metrics.record_token_verification(e.code)
                return TokenVerificationResponse(valid=False, code=e.code, error=e.message)

            self.metrics.record_token_verification("valid")
            return TokenVerificationResponse(
                valid=True,
                header=verified.header,
                payload=verified.payload
            )


def create_app(config: ServiceConfig = None):
    """Create FastAPI application."""
    service = TokenService(config)
    return service.app


if __name__ == "__main__":
    service = TokenService()
    service.run()
