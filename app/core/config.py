"""Application configuration using Pydantic Settings.

This project loads configuration from environment variables.

Optionally, you may point `ENV_FILE` at a local env file (for development).
"""

import os
from enum import Enum

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    """Application environment values."""

    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class Settings(BaseSettings):
    """
    Application settings with type validation.

    Configuration is loaded from environment variables, with support
    for .env files in development.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="", extra="ignore"
    )

    # Application
    app_env: AppEnvironment = AppEnvironment.LOCAL
    app_name: str = "asset-management-api"
    app_log_level: str = "INFO"

    # Observability
    observability_enabled: bool = True
    observability_structured_logs: bool = True

    # Database (async SQLAlchemy URL, e.g. postgresql+asyncpg://...)
    database_url: str
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Keycloak realm that issues bearer tokens
    keycloak_url: str
    keycloak_realm: str
    keycloak_audience: str | None = None
    keycloak_algorithms: str = "RS256"

    # Local Development: Skip JWT validation
    # SECURITY: ONLY allowed in LOCAL environment. Will raise error in TEST/PROD.
    skip_jwt_validation: bool = Field(
        default=False, validation_alias="SECURITY_SKIP_JWT_VALIDATION"
    )

    @field_validator("skip_jwt_validation", mode="before")
    @classmethod
    def parse_skip_jwt_validation(cls, v: bool | str) -> bool:
        """Parse skip_jwt_validation from string or bool."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return bool(v)

    # Metrics token for protecting /metrics endpoint
    metrics_token: str | None = None

    # CORS Configuration (semicolon or comma separated)
    cors_origins: str = "http://localhost:3000"

    # Pagination
    pagination_default_page_size: int = Field(default=10, ge=1)
    pagination_max_page_size: int = Field(default=100, ge=1)

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        raw = self.cors_origins.replace(";", ",")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def keycloak_algorithms_list(self) -> list[str]:
        """Parse accepted signing algorithms into a list."""
        return [algo.strip() for algo in self.keycloak_algorithms.split(",")]

    @property
    def keycloak_issuer(self) -> str:
        """Issuer claim expected on every token of the realm."""
        return f"{self.keycloak_url.rstrip('/')}/realms/{self.keycloak_realm}"

    @property
    def keycloak_jwks_url(self) -> str:
        """Realm JWKS endpoint."""
        return f"{self.keycloak_issuer}/protocol/openid-connect/certs"

    @field_validator("app_env", mode="before")
    @classmethod
    def validate_app_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        """Validate and parse app_env to AppEnvironment enum."""
        if isinstance(v, AppEnvironment):
            return v
        try:
            return AppEnvironment(v.lower())
        except ValueError:
            raise ValueError(
                f"app_env must be one of {[e.value for e in AppEnvironment]}, got '{v}'"
            )

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """
        Validate production-specific settings.

        These checks prevent insecure configurations from being deployed to production.
        """
        if self.pagination_default_page_size > self.pagination_max_page_size:
            raise ValueError(
                "PAGINATION_DEFAULT_PAGE_SIZE must not exceed PAGINATION_MAX_PAGE_SIZE"
            )

        # SECURITY: JWT validation bypass is ONLY allowed in LOCAL environment
        if self.skip_jwt_validation and self.app_env != AppEnvironment.LOCAL:
            raise ValueError(
                "SECURITY_SKIP_JWT_VALIDATION can only be set in local environment. "
                f"Current environment: {self.app_env.value}"
            )

        if self.app_env == AppEnvironment.PROD:
            if not self.database_url.startswith("postgresql"):
                raise ValueError("DATABASE_URL must use a postgresql scheme in production")

            if not self.keycloak_url.startswith("https://"):
                raise ValueError("KEYCLOAK_URL must use HTTPS in production")

            # CORS must not allow localhost in production
            for origin in self.cors_origins_list:
                if "localhost" in origin or "127.0.0.1" in origin:
                    raise ValueError(
                        f"CORS origins must not contain localhost in production: {origin}"
                    )

        return self


settings = Settings()
