"""Application settings and configuration.

This module defines all configuration options for the AskHub application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="AskHub", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Bearer token verification
    secret_key: str = Field(default="dev-secret-change-me", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./askhub.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    sqlite_busy_timeout_seconds: float = Field(
        default=30.0,
        alias="SQLITE_BUSY_TIMEOUT_SECONDS",
    )

    # Automatic content pre-screening
    auto_flag_threshold: int = Field(default=8, alias="AUTO_FLAG_THRESHOLD")
    auto_flag_high_priority_threshold: int = Field(
        default=15,
        alias="AUTO_FLAG_HIGH_PRIORITY_THRESHOLD",
    )
    moderation_link_allowance: int = Field(default=3, alias="MODERATION_LINK_ALLOWANCE")
    moderation_caps_ratio: float = Field(default=0.6, alias="MODERATION_CAPS_RATIO")
    moderation_caps_min_chars: int = Field(default=10, alias="MODERATION_CAPS_MIN_CHARS")
    moderation_repeat_limit: int = Field(default=5, alias="MODERATION_REPEAT_LIMIT")
    moderation_spam_keywords: list[str] = Field(
        default=[
            "buy now", "click here", "free money", "get rich quick",
            "limited time", "urgent", "act now", "guaranteed",
            "no questions asked", "risk free", "this is not spam",
        ],
        alias="MODERATION_SPAM_KEYWORDS",
    )
    moderation_flagged_words: list[str] = Field(
        default=["hate", "stupid", "idiot", "moron", "dumb"],
        alias="MODERATION_FLAGGED_WORDS",
    )

    # Read layer
    trending_window_days: int = Field(default=7, alias="TRENDING_WINDOW_DAYS")
    trending_limit: int = Field(default=5, alias="TRENDING_LIMIT")
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_tags_per_question: int = Field(default=5, alias="MAX_TAGS_PER_QUESTION")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
