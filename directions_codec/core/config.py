from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    MAPBOX_ACCESS_TOKEN: Optional[str] = None
    BASE_API_URL: str = "https://api.mapbox.com"
    PROFILE_DEFAULT_USER: str = "mapbox"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "development" or "production"

    @property
    def is_production(self):
        return self.ENVIRONMENT == "production"

    @property
    def directions_url(self):
        return f"{self.BASE_API_URL.rstrip('/')}/directions/v5"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
