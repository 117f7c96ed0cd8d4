"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SECRET_KEY, and DATABASE_URL when the
postgres backend is selected) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "taskhub"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database: "postgres" (SQLAlchemy + Alembic) or "none" (no SQL store; DB routes return 503)
    database_backend: str = "postgres"
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security: bearer tokens are issued by the identity provider; we only verify them.
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    # Lifetime of tokens signed locally (scripts/issue_dev_token.py, tests).
    access_token_expire_minutes: int = 60

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Rate limits (SlowAPI syntax), keyed by client address
    write_rate_limit: str = "120/minute"
    message_send_rate_limit: str = "60/minute"

    # Task lifecycle: status whose first entry notifies every admin.
    progress_notify_status: str = "in progress"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def cors_origins(self) -> list[str]:
        """ALLOWED_ORIGINS split on commas, blanks dropped."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env for the selected database backend and security."""
        if self.database_backend == "postgres":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when database_backend is 'postgres'. "
                    "Set in environment or .env file."
                )
        elif self.database_backend != "none":
            raise ValueError(
                f"database_backend must be 'postgres' or 'none', got: {self.database_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required (shared with the identity provider that issues tokens)."
            )
        if not self.progress_notify_status.strip():
            raise ValueError("PROGRESS_NOTIFY_STATUS must not be empty")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
