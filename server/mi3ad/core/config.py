"""Configuration settings for the Mi3AD API."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    # Database settings
    database_url: str = Field(
        default="sqlite+aiosqlite:///./mi3ad.db",
        description="Async database URL (PostgreSQL via asyncpg or SQLite via aiosqlite)"
    )

    # Environment settings
    environment: str = Field(
        default="development",
        description="Application environment"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    # Security settings
    bearer_token_secret: str = Field(
        default="your-secret-key-here",
        description="Secret key for signing bearer tokens"
    )

    access_token_ttl_minutes: int = Field(
        default=60 * 24 * 7,
        ge=1,
        description="Lifetime of issued access tokens in minutes"
    )

    demo_login_enabled: bool = Field(
        default=True,
        description="Fabricate a demo profile when logging in with an unknown phone"
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:8081", "http://localhost:19006", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Server host"
    )

    port: int = Field(
        default=8000,
        description="Server port"
    )

    # Observability settings
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP collector endpoint for traces and metrics"
    )

    # Background worker settings
    workers_enabled: bool = Field(
        default=True,
        description="Start background simulation workers on startup"
    )

    notification_interval_seconds: int = Field(
        default=30,
        ge=1,
        description="How often a simulated notification is pushed"
    )

    incoming_message_interval_seconds: int = Field(
        default=45,
        ge=1,
        description="How often a school sends an unsolicited message"
    )

    school_reply_interval_seconds: int = Field(
        default=1,
        ge=1,
        description="How often scheduled school replies are delivered"
    )

    session_lock_interval_seconds: int = Field(
        default=60,
        ge=1,
        description="How often idle sessions are checked for auto-lock"
    )

    # Chat simulation settings
    chat_welcome_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Delay before a school's welcome message"
    )

    chat_reply_min_delay_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Minimum delay before a school answers a message"
    )

    chat_reply_max_delay_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Maximum delay before a school answers a message"
    )

    # Notification settings
    max_notifications_for_simulation: int = Field(
        default=10,
        ge=0,
        description="Simulated notifications stop once a user has this many"
    )

    # Audit settings
    audit_log_retention: int = Field(
        default=1000,
        ge=1,
        description="Number of audit log entries kept per user"
    )

    # Ticket settings
    qr_code_prefix: str = Field(
        default="MI3AD",
        description="Prefix of generated ticket QR codes"
    )

    public_base_url: str = Field(
        default="https://mi3ad.app",
        description="Base URL used for shareable ticket links"
    )

    wallet_api_base_url: str = Field(
        default="https://api.mi3ad.app",
        description="Base URL used for wallet pass downloads"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = Settings()
