"""
Application configuration settings.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API settings
    API_V1_PREFIX: str = "/api"
    PROJECT_NAME: str = "Aadhaar Analytics Dashboard"
    VERSION: str = "1.0.0"

    # Local server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Anomaly detection (population z-score per state/district series)
    ANOMALY_Z_THRESHOLD: float = 2.5
    ANOMALY_HIGH_Z: float = 4.0
    ANOMALY_MIN_OBSERVATIONS: int = 3
    ANOMALY_MAX_RESULTS: int = 15

    # Monthly forecast
    FORECAST_HORIZON_MONTHS: int = 6
    FORECAST_MIN_HISTORY: int = 2
    FORECAST_BASE_CONFIDENCE: int = 95
    FORECAST_CONFIDENCE_DECAY: int = 5
    FORECAST_MIN_CONFIDENCE: int = 60
    FORECAST_TREND_BAND: float = 0.05  # fraction of the mean

    # Query resolver / insights
    QUERY_DEFAULT_TOP_N: int = 5
    STATE_PROFILE_LIMIT: int = 10
    ACTIVITY_FEED_LIMIT: int = 10

    class Config:
        env_file = ".env"
        extra = "allow"


# Global settings instance
settings = Settings()
