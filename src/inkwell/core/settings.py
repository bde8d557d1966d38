"""Application settings and configuration.

This module defines all configuration options for the Inkwell application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    This class defines all configuration options for the Inkwell application.
    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Inkwell", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./inkwell.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Identity provider tokens (verified, never issued, by this service)
    identity_jwt_secret: str = Field(alias="IDENTITY_JWT_SECRET")
    identity_jwt_algorithm: str = Field(default="HS256", alias="IDENTITY_JWT_ALGORITHM")
    identity_jwt_audience: str | None = Field(default=None, alias="IDENTITY_JWT_AUDIENCE")
    identity_jwt_issuer: str | None = Field(default=None, alias="IDENTITY_JWT_ISSUER")

    # Ranking and analytics tunables
    trending_window_days: int = Field(default=7, ge=1, alias="TRENDING_WINDOW_DAYS")
    trending_like_weight: int = Field(default=3, ge=0, alias="TRENDING_LIKE_WEIGHT")
    analytics_window_days: int = Field(default=30, ge=1, alias="ANALYTICS_WINDOW_DAYS")
    activity_per_source: int = Field(default=5, ge=1, alias="ACTIVITY_PER_SOURCE")

    # Content limits
    comment_max_length: int = Field(default=1000, alias="COMMENT_MAX_LENGTH")
    bio_max_length: int = Field(default=300, alias="BIO_MAX_LENGTH")
    post_max_tags: int = Field(default=10, alias="POST_MAX_TAGS")

    # Default page sizes
    feed_page_size: int = Field(default=10, alias="FEED_PAGE_SIZE")
    followers_page_size: int = Field(default=20, alias="FOLLOWERS_PAGE_SIZE")
    dashboard_posts_page_size: int = Field(default=5, alias="DASHBOARD_POSTS_PAGE_SIZE")

    # Writing assistant (Gemini REST API)
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    assistant_timeout_seconds: float = Field(default=30.0, alias="ASSISTANT_TIMEOUT_SECONDS")

    # Image storage (ImageKit client-side uploads)
    imagekit_public_key: str | None = Field(default=None, alias="IMAGEKIT_PUBLIC_KEY")
    imagekit_private_key: str | None = Field(default=None, alias="IMAGEKIT_PRIVATE_KEY")
    imagekit_url_endpoint: str = Field(
        default="https://ik.imagekit.io/inkwell",
        alias="IMAGEKIT_URL_ENDPOINT",
    )
    image_upload_ttl_seconds: int = Field(
        default=1800,
        ge=60,
        le=3600,
        alias="IMAGE_UPLOAD_TTL_SECONDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
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
        populate_by_name=True,
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
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def assistant_enabled(self) -> bool:
        """Whether the writing assistant has credentials configured."""
        return bool(self.gemini_api_key)

    @property
    def image_uploads_enabled(self) -> bool:
        """Whether ImageKit upload credentials are configured."""
        return bool(self.imagekit_public_key and self.imagekit_private_key)


settings = Settings()  # type: ignore[call-arg]
