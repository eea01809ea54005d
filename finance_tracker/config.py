"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage
    database_url: str = "sqlite:///./finance_tracker.db"

    # Calendar: "today" is computed in this zone
    timezone: str = "America/Sao_Paulo"

    # Service
    service_name: str = "finance-tracker"
    log_level: str = "INFO"

    # Advice generation (external text-generation endpoint)
    advice_api_base: str = "https://generativelanguage.googleapis.com"
    advice_model: str = "gemini-2.5-flash"
    advice_api_key: str | None = None

    # HTTP Client
    http_timeout_seconds: float = 30.0

    # Display
    currency_symbol: str = "R$"


settings = Settings()
