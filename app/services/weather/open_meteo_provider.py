import logging
from typing import Optional

from app.models.weather import WeatherSnapshot
from .base import WeatherProvider

logger = logging.getLogger(__name__)


def condition_from_wmo_code(code: Optional[int]) -> str:
    """Map a WMO weather interpretation code to a normalized condition."""
    if code is None:
        return "unknown"
    if code == 0:
        return "clear"
    if code in (1, 2, 3):
        return "clouds"
    if code in (45, 48):
        return "fog"
    if 51 <= code <= 57:
        return "drizzle"
    if 61 <= code <= 67 or 80 <= code <= 82:
        return "rain"
    if 71 <= code <= 77 or code in (85, 86):
        return "snow"
    if code >= 95:
        return "thunderstorm"
    return "unknown"


class OpenMeteoProvider(WeatherProvider):
    """
    Open-Meteo current conditions.

    - No API key required.
    - Reads "current.weather_code" and "current.precipitation" (mm).
    """

    name = "open-meteo"
    BASE_URL = "https://api.open-meteo.com/v1/forecast"

    def current_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        data = self._get_json(
            self.BASE_URL,
            params={"latitude": latitude, "longitude": longitude, "current": "precipitation,weather_code"},
        )
        if not isinstance(data, dict):
            return self.neutral()
        current = data.get("current")
        if not isinstance(current, dict):
            return self.neutral()

        try:
            code = current.get("weather_code")
            precipitation = current.get("precipitation")
            return WeatherSnapshot(
                condition=condition_from_wmo_code(int(code) if code is not None else None),
                precipitation_mm=float(precipitation) if precipitation is not None else None,
                provider=self.name,
            )
        except (TypeError, ValueError) as e:
            logger.warning(f"Unexpected Open-Meteo payload: {e}")
            return self.neutral()
