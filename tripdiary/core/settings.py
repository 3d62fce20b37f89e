from functools import lru_cache
from typing import List
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # API Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: str = "*"  # Comma-separated
    LOG_LEVEL: str = "INFO"

    # Distance provider: "openroute" (OpenCage + OpenRouteService) or "google"
    DISTANCE_PROVIDER: str = "openroute"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Geocoding / routing API Keys
    OPENCAGE_API_KEY: str | None = None
    OPENROUTESERVICE_API_KEY: str | None = None
    GOOGLE_MAPS_API_KEY: str | None = None

    # Geocoder and routing options
    GEOCODER_LANGUAGE: str = "fr"
    GEOCODER_COUNTRY_CODE: str = "fr"
    ROUTING_PROFILE: str = "driving-car"

    # OpenAI Configuration
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_NAME: str = "gpt-3.5-turbo"

    # Environment name
    ENVIRONMENT: str = "development"

    model_config = SettingsConfigDict(
        case_sensitive=True,  # Variables are case-sensitive
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @field_validator("DISTANCE_PROVIDER")
    @classmethod
    def check_distance_provider(cls, v: str) -> str:
        v = v.lower()
        if v not in ("openroute", "google"):
            raise ValueError(f"Unsupported distance provider: {v}")
        return v


@lru_cache()  # Cache the settings object for performance
def get_settings() -> Settings:
    return Settings()
