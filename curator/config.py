"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Missing auth-provider service key disables admin lookups (check-email fails open)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://curator:curator@db:5432/curator"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Anthropic (text + vision)
    anthropic_api_key: str = "sk-ant-placeholder"
    anthropic_model: str = "claude-sonnet-4-5"
    anthropic_max_retries: int = 3
    anthropic_timeout_seconds: int = 120
    anthropic_base_delay_ms: int = 1000
    anthropic_max_delay_ms: int = 60_000

    # OpenAI (poster images)
    openai_api_key: str = "sk-placeholder"
    openai_image_model: str = "dall-e-3"
    poster_image_size: str = "1024x1792"
    poster_image_quality: str = "hd"

    # Auth provider + object storage (Supabase-compatible REST)
    auth_provider_url: str = "http://localhost:54321"
    auth_provider_anon_key: str = ""
    auth_provider_service_key: str = ""
    storage_bucket: str = "artworks"
    http_timeout_seconds: float = 30.0

    # Site
    site_url: str = "http://localhost:3000"
    webhook_secret: str = ""

    # Rate limits (requests per minute, per client IP)
    check_email_rate_limit: int = 5
    resend_verification_rate_limit: int = 3

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
