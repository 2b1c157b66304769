"""Application settings and configuration.

This module defines all configuration options for the WikiReview application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="WikiReview", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(
        default="sqlite:///./data/comments-ratings.db",
        alias="DATABASE_URL",
    )
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Session cookie settings
    session_ttl_days: int = Field(default=30, ge=1, alias="SESSION_TTL_DAYS")
    session_cookie_name: str = Field(default="sessionId", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")

    # PBKDF2 password hashing parameters
    password_hash_iterations: int = Field(
        default=10_000,
        ge=10_000,
        alias="PASSWORD_HASH_ITERATIONS",
    )
    password_hash_key_bytes: int = Field(default=64, ge=64, alias="PASSWORD_HASH_KEY_BYTES")
    password_salt_bytes: int = Field(default=16, ge=16, alias="PASSWORD_SALT_BYTES")

    # Identity used for unauthenticated comments and ratings
    anonymous_author: str = Field(default="Anonymous", alias="ANONYMOUS_AUTHOR")

    # Deepest reply level rendered by the comment listing; deeper replies are hoisted
    comment_max_nesting_depth: int = Field(
        default=100,
        ge=1,
        le=200,
        alias="COMMENT_MAX_NESTING_DEPTH",
    )

    # External wiki engine
    mediawiki_api_url: str = Field(
        default="http://localhost:8000/api.php",
        alias="MEDIAWIKI_API_URL",
    )
    mediawiki_http_timeout_seconds: float = Field(
        default=10.0,
        alias="MEDIAWIKI_HTTP_TIMEOUT_SECONDS",
    )

    # CORS configuration for the web frontend
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def session_max_age_seconds(self) -> int:
        """Return the session lifetime in seconds for the cookie Max-Age."""
        return self.session_ttl_days * 24 * 60 * 60


settings = Settings()
