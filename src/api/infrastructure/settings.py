"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        IMF_DB_HOST: Database host (default: localhost)
        IMF_DB_PORT: Database port (default: 5432)
        IMF_DB_DATABASE: Database name (default: imf_gadgets)
        IMF_DB_USERNAME: Database user (default: imf)
        IMF_DB_PASSWORD: Database password (required in production)
        IMF_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        IMF_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="IMF_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="imf_gadgets", description="Database name")
    username: str = Field(default="imf", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Credential and session cookie settings.

    Environment variables:
        IMF_AUTH_JWT_SECRET: Token signing secret (required)
        IMF_AUTH_JWT_ALGORITHM: Signing algorithm (default: HS256)
        IMF_AUTH_TOKEN_TTL_SECONDS: Token lifetime (default: 86400, one day)
        IMF_AUTH_COOKIE_NAME: Session cookie name (default: token)
        IMF_AUTH_COOKIE_MAX_AGE_SECONDS: Cookie lifetime (default: 3600)
        IMF_AUTH_COOKIE_SECURE: Mark the cookie Secure (default: false)
        IMF_AUTH_BCRYPT_ROUNDS: bcrypt cost factor (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="IMF_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Shared secret for signing session tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    token_ttl_seconds: int = Field(
        default=86400,
        description="Session token lifetime in seconds",
        ge=60,
    )
    cookie_name: str = Field(default="token", description="Session cookie name")
    cookie_max_age_seconds: int = Field(
        default=3600,
        description="Session cookie max-age in seconds",
        ge=1,
    )
    cookie_secure: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS",
    )
    bcrypt_rounds: int = Field(
        default=10,
        description="bcrypt cost factor",
        ge=4,
        le=31,
    )

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_algorithm(cls, value: str) -> str:
        """Only HMAC algorithms are supported for a shared secret."""
        if value not in ("HS256", "HS384", "HS512"):
            raise ValueError(f"Unsupported JWT algorithm: {value}")
        return value

    def require_secret(self, allow_weak: bool = False) -> str:
        """Return the signing secret, refusing to run without one.

        Args:
            allow_weak: Accept secrets shorter than 32 characters (debug only).

        Raises:
            ValueError: If the secret is missing or too short.
        """
        secret = self.jwt_secret.get_secret_value()
        if not secret:
            raise ValueError("IMF_AUTH_JWT_SECRET must be set")
        if len(secret) < 32 and not allow_weak:
            raise ValueError("IMF_AUTH_JWT_SECRET must be at least 32 characters")
        return secret


class RateLimitSettings(BaseSettings):
    """Per-client request rate limiting.

    Environment variables:
        IMF_RATE_LIMIT_ENABLED: Enable the limiter (default: true)
        IMF_RATE_LIMIT_WINDOW_SECONDS: Window length (default: 600)
        IMF_RATE_LIMIT_MAX_REQUESTS: Requests allowed per window (default: 20)
    """

    model_config = SettingsConfigDict(
        env_prefix="IMF_RATE_LIMIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Enable rate limiting")
    window_seconds: int = Field(default=600, ge=1, description="Window length")
    max_requests: int = Field(default=20, ge=1, description="Requests per window")


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections.

    Environment variables:
        IMF_APP_NAME: Application name (default: IMF Gadget API)
        IMF_DEBUG: Debug mode (default: false)
        IMF_LOG_LEVEL: Minimum log level (default: info)
        IMF_HOST: Bind address for the bundled server (default: 0.0.0.0)
        IMF_PORT: Bind port for the bundled server (default: 8000)
        IMF_CORS_ORIGINS: Allowed CORS origins (default: http://localhost:3000)
    """

    model_config = SettingsConfigDict(
        env_prefix="IMF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="IMF Gadget API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="info", description="Minimum log level")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to make credentialed requests",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in ("debug", "info", "warning", "error", "critical"):
            raise ValueError(f"Unknown log level: {value}")
        return normalized

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get auth settings."""
        return get_auth_settings()

    @property
    def rate_limit(self) -> RateLimitSettings:
        """Get rate limit settings."""
        return get_rate_limit_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_rate_limit_settings() -> RateLimitSettings:
    """Get cached rate limit settings."""
    return RateLimitSettings()
