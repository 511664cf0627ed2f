from typing import List, Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "Sales Analytics Dashboard"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Dataset Settings
    DATA_FILE: str = "data/sales_data.csv"
    DATA_CACHE_ENABLED: bool = False
    DATA_READ_TIMEOUT: Optional[float] = None

    # API Settings
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings():
    return Settings()


settings = get_settings()
