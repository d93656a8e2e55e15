import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # General
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # API keys
    COINGECKO_API_KEY: str | None = None
    ALCHEMY_API_KEY: str | None = None
    ALCHEMY_NETWORK: str = "eth-mainnet"

    # Database config
    REDIS_HOST: str = "redis-master"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str | None = None

    # Analysis
    LOOKBACK_DAYS: int = 30
    TOP_COINS_LIMIT: int = 10

    # HTTP
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Monitoring
    SENTRY_DSN: str | None = None
    PROMETHEUS_PORT: int = 8090

    model_config = SettingsConfigDict(env_file=os.environ.get("ENV_FILE", ".env"))


settings = Settings()
