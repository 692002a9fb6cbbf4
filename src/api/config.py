from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Flood Risk Engine API"
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # CORS - accepts comma-separated string from env vars
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173", "http://localhost:8000"]

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin for origin in self.CORS_ORIGINS if origin]

    # Upstream precipitation feed (Open-Meteo daily forecast)
    PRECIPITATION_API_URL: str = "https://api.open-meteo.com/v1/forecast"
    PRECIPITATION_TIMEOUT: int = 30
    PRECIPITATION_MAX_RETRIES: int = 3
    PRECIPITATION_BACKOFF: float = 1.0
    PRECIPITATION_REFRESH_SECONDS: int = 300  # 5 minutes

    # Simulated processing delay before a scenario run (presentation only)
    SIMULATION_DELAY_SECONDS: float = 0.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance"""
    return Settings()


settings = get_settings()
