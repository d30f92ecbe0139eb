import logging
from typing import Optional

from app.models.weather import WeatherSnapshot
from .base import WeatherProvider

logger = logging.getLogger(__name__)

_MAIN_TO_CONDITION = {
    "clear": "clear",
    "clouds": "clouds",
    "drizzle": "drizzle",
    "rain": "rain",
    "thunderstorm": "thunderstorm",
    "snow": "snow",
    "mist": "fog",
    "fog": "fog",
    "haze": "fog",
}


class OpenWeatherMapProvider(WeatherProvider):
    """
    OpenWeatherMap current weather.

    Used only when WEATHER_PROVIDER=openweathermap AND OPENWEATHER_API_KEY is set.
    """

    name = "openweathermap"
    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: Optional[str]):
        self.api_key = api_key

    def current_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        if not self.api_key:
            logger.info("OpenWeatherMapProvider called without API key; returning neutral snapshot.")
            return self.neutral()

        data = self._get_json(self.BASE_URL, params={"lat": latitude, "lon": longitude, "appid": self.api_key})
        if not isinstance(data, dict):
            return self.neutral()

        try:
            weather = data.get("weather") or [{}]
            main = (weather[0].get("main") or "").lower()
            rain_1h = (data.get("rain") or {}).get("1h")
            return WeatherSnapshot(
                condition=_MAIN_TO_CONDITION.get(main, "unknown"),
                precipitation_mm=float(rain_1h) if rain_1h is not None else None,
                provider=self.name,
            )
        except (AttributeError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Unexpected OpenWeatherMap payload: {e}")
            return self.neutral()
