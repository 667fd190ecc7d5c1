"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    categorization_api_url: str = "http://localhost:8001/api/chat"

    # Service
    service_name: str = "purchase-advisor"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Classification cache
    classification_cache_max_size: int = 100
    classification_cache_ttl_seconds: float = 30 * 60


settings = Settings()
