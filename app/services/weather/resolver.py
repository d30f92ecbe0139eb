import logging
from typing import Optional

from app.core.settings import settings
from app.models.weather import WeatherSnapshot
from .base import WeatherProvider
from .open_meteo_provider import OpenMeteoProvider
from .openweathermap_provider import OpenWeatherMapProvider

logger = logging.getLogger(__name__)

_provider_instance: Optional[WeatherProvider] = None


def get_weather_provider() -> WeatherProvider:
    """
    Resolve the active weather provider based on settings.

    - Default: Open-Meteo (no API key required).
    - WEATHER_PROVIDER='openweathermap' with OPENWEATHER_API_KEY set: OpenWeatherMap.
    """
    global _provider_instance
    if _provider_instance is not None:
        return _provider_instance

    provider_name = (settings.WEATHER_PROVIDER or "open-meteo").lower()

    if provider_name == "openweathermap" and settings.OPENWEATHER_API_KEY:
        _provider_instance = OpenWeatherMapProvider(api_key=settings.OPENWEATHER_API_KEY)
    else:
        if provider_name not in ("open-meteo", "openweathermap"):
            logger.warning(f"Unknown WEATHER_PROVIDER '{provider_name}', using open-meteo")
        _provider_instance = OpenMeteoProvider()

    logger.info(f"Weather provider initialized: {_provider_instance.name}")
    return _provider_instance


def check_weather(latitude: float, longitude: float) -> WeatherSnapshot:
    """Current weather at a coordinate. Never raises."""
    return get_weather_provider().current_weather(latitude, longitude)
