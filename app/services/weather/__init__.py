"""
Weather lookup used for hazard classification at submission time.

Providers never raise; any failure yields a neutral (no rain) snapshot.
"""

from app.services.weather.base import WeatherProvider
from app.services.weather.open_meteo_provider import OpenMeteoProvider
from app.services.weather.openweathermap_provider import OpenWeatherMapProvider
from app.services.weather.resolver import check_weather, get_weather_provider

__all__ = [
    "WeatherProvider",
    "OpenMeteoProvider",
    "OpenWeatherMapProvider",
    "check_weather",
    "get_weather_provider",
]
