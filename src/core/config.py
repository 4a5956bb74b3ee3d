"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="profile-editor", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        description="Comma-separated list of allowed CORS origins",
    )

    # Localization
    default_locale: str = Field(default="en", description="Locale used when negotiation finds no match")

    # User API collaborator
    deployment_host: str | None = Field(
        default=None,
        description="Host name provided by the deployment platform (no scheme)",
    )
    local_base_url: str = Field(default="http://localhost:8080", description="Base URL used locally")
    mock_user_api: bool | None = Field(
        default=None,
        description="Simulate persistence instead of calling PUT /api/user. Auto-enabled outside production.",
    )
    user_api_timeout_seconds: float = Field(default=10.0, description="Timeout for user API calls")
    submission_delay_seconds: float = Field(default=1.0, description="Simulated persistence delay")
    user_api_delay_seconds: float = Field(default=1.5, description="Simulated latency of the /api/user routes")

    # Avatar uploads
    avatar_max_bytes: int = Field(default=5 * 1024 * 1024, description="Maximum avatar size in bytes (5MB)")
    max_request_body_size: int = Field(default=6 * 1024 * 1024, description="Maximum request body size in bytes")

    # Rendered page cache
    page_cache_ttl_seconds: int = Field(default=300, description="TTL for cached page renderings")
    page_cache_max_size: int = Field(default=100, description="Maximum cached page renderings")

    # Form controller
    success_auto_clear_seconds: float | None = Field(
        default=5.0,
        description="Delay before a successful form state is cleared (unset to keep it)",
    )

    @model_validator(mode="after")
    def set_mock_user_api_default(self) -> "Settings":
        """Set mock_user_api based on environment if not explicitly set via MOCK_USER_API.

        - Production (APP_ENV=production): False
        - Development/Staging/Test: True
        """
        if self.mock_user_api is None:
            self.mock_user_api = self.app_env != "production"

        return self

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def api_base_url(self) -> str:
        """Base URL of the user API, preferring the deployment-provided host."""
        if self.deployment_host:
            return f"https://{self.deployment_host}"
        return self.local_base_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
