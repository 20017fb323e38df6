"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    app_name: str = "tradedesk"
    environment: str = "development"
    port: int = 3002
    log_level: str = "INFO"

    # MongoDB (required, startup fails without it)
    # MONGO_URL is the name older deployments use
    mongo_uri: str = Field(validation_alias=AliasChoices("MONGO_URI", "MONGO_URL"))

    # Redis (rate limit counters)
    redis_host: str = "redis"
    redis_port: int = 6379

    # JWT Configuration (secret is required)
    jwt_secret_key: str = Field(validation_alias=AliasChoices("JWT_SECRET_KEY", "JWT_SECRET"))
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10

    # CORS
    frontend_url: str | None = None
    dashboard_url: str | None = None
    cors_extra_origins: list[str] = []

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    security_headers_enabled: bool = True

    # Order approval sweep
    approval_sweep_enabled: bool = True
    approval_sweep_interval_seconds: float = 10.0

    # Order placement
    holding_update_max_retries: int = 5
    order_rejection_status_code: int = 500

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        """Origins allowed by CORS, configured URLs first."""
        origins = [self.frontend_url, self.dashboard_url, *self.cors_extra_origins]
        return [origin for origin in origins if origin]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
