"""
Shared configuration management for the token service.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="TOKENS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Signing
    signing_key: Optional[SecretStr] = Field(default=None)
    default_algorithm: str = Field(default="HS256")

    # Verification policy
    allow_unsecured: bool = Field(default=False)
    validate_time_claims: bool = Field(default=True)
    leeway_ms: int = Field(default=0, ge=0)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
