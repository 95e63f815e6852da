"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./fraud_monitor.db"

    # Prediction endpoint (default until an operator saves another one)
    prediction_api_base: str = "http://localhost:5000"
    prediction_timeout_seconds: float = 10.0

    # Fallback heuristic: number of highest-amount transactions flagged as fraud
    fallback_fraud_count: int = 11

    # Dashboard
    mock_transaction_count: int = 150

    # Service
    service_name: str = "fraud-monitor"
    log_level: str = "INFO"


settings = Settings()
