"""
Runtime settings for the BlytzWork API, read from the environment and .env.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, validator


DEFAULT_ORIGINS = ["http://localhost:3000", "http://localhost:3001"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_title: str = Field(default="BlytzWork API")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Database
    database_url: Optional[str] = Field(default=None, description="SQLAlchemy database URL")
    database_echo: bool = Field(default=False)

    # Firebase Admin
    firebase_project_id: Optional[str] = Field(default=None)
    firebase_client_email: Optional[str] = Field(default=None)
    firebase_private_key: Optional[str] = Field(default=None)

    # Stripe
    stripe_secret_key: Optional[str] = Field(default=None)
    stripe_webhook_secret: Optional[str] = Field(default=None)
    payment_amount: float = Field(default=29.99, description="Contact unlock fee")
    payment_currency: str = Field(default="usd")
    platform_fee_percentage: float = Field(default=10.0)

    # CORS
    allowed_origins: str | List[str] = Field(default="")
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Pagination
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Cloudflare R2 (S3 compatible)
    cloudflare_r2_account_id: Optional[str] = Field(default=None)
    cloudflare_r2_access_key_id: Optional[str] = Field(default=None)
    cloudflare_r2_secret_access_key: Optional[str] = Field(default=None)
    cloudflare_r2_bucket_name: Optional[str] = Field(default=None)
    cloudflare_r2_public_url: Optional[str] = Field(default=None)
    upload_url_expiry_seconds: int = Field(default=3600)

    # Rate Limiting
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_window_minutes: int = Field(default=15)
    rate_limit_max_requests: int = Field(default=100)
    redis_url: Optional[str] = Field(default=None)

    # Sentry (Optional)
    sentry_dsn: Optional[str] = Field(default=None)
    sentry_traces_sample_rate: float = Field(default=0.1)

    @validator("allowed_origins", pre=True, always=True)
    def parse_allowed_origins(cls, v):
        """ALLOWED_ORIGINS is a comma-separated list; empty means the local frontends."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return list(DEFAULT_ORIGINS)
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @validator("firebase_private_key", pre=True)
    def normalize_private_key(cls, v):
        """Service account keys stored in .env files carry literal \\n sequences."""
        return v.replace("\\n", "\n") if isinstance(v, str) else v

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def unlock_fee_cents(self) -> int:
        """Contact unlock fee in the smallest currency unit."""
        return int(round(self.payment_amount * 100))

    @property
    def rate_limit_window_seconds(self) -> int:
        return self.rate_limit_window_minutes * 60

    @property
    def storage_configured(self) -> bool:
        """R2 uploads need the account, both keys and a bucket."""
        return all([
            self.cloudflare_r2_account_id,
            self.cloudflare_r2_access_key_id,
            self.cloudflare_r2_secret_access_key,
            self.cloudflare_r2_bucket_name,
        ])

    @property
    def r2_endpoint_url(self) -> Optional[str]:
        if not self.cloudflare_r2_account_id:
            return None
        return f"https://{self.cloudflare_r2_account_id}.r2.cloudflarestorage.com"

    def validate_environment(self) -> None:
        """Raise when the database, Firebase or Stripe is not configured."""
        missing = [
            name.upper()
            for name in ("database_url", "firebase_project_id", "stripe_secret_key")
            if not getattr(self, name, None)
        ]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")


@lru_cache()
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings()


settings = get_settings()
