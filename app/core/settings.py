"""
Core settings and environment variables for Civic Pulse.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Civic Pulse"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    # Mock DB mode for local development without Firebase credentials
    USE_MOCK_DB: bool = False
    MOCK_DB_PATH: Optional[str] = "./mock_db.json"  # None keeps the mock purely in memory

    # Reverse geocoding
    # - GEOCODING_PROVIDER: "nominatim" (default, no API key) or "google"
    # - GOOGLE_MAPS_API_KEY: optional; only used when provider is "google"
    GEOCODING_PROVIDER: str = "nominatim"
    GOOGLE_MAPS_API_KEY: Optional[str] = None

    # Weather lookup
    # - WEATHER_PROVIDER: "open-meteo" (default, no API key) or "openweathermap"
    # - OPENWEATHER_API_KEY: optional; only used when provider is "openweathermap"
    WEATHER_PROVIDER: str = "open-meteo"
    OPENWEATHER_API_KEY: Optional[str] = None

    # Upper bound for each external lookup at report creation
    LOOKUP_TIMEOUT_SECONDS: float = 10.0

    # Fixed coordinate used when the device location is unavailable
    DEMO_LATITUDE: float = 12.9716
    DEMO_LONGITUDE: float = 77.5946

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self):
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
