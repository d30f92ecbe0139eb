from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging

import requests

from app.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_SECONDS = 3.0


class WeatherProvider(ABC):
    """
    Abstract current-weather provider.

    Contract:
    - Input: latitude, longitude (floats)
    - Output: WeatherSnapshot with a normalized condition
    - MUST NEVER raise upstream exceptions.
    - MUST return a neutral snapshot (condition "unknown") on failure.
    """

    name = "base"

    @abstractmethod
    def current_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        raise NotImplementedError

    def neutral(self) -> WeatherSnapshot:
        return WeatherSnapshot(condition="unknown", provider=self.name)

    def _get_json(self, url: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """GET a JSON document; None on any transport or status failure."""
        try:
            resp = requests.get(url, params=params, timeout=HTTP_TIMEOUT_SECONDS)
            if resp.status_code != 200:
                logger.warning(f"{self.name} weather lookup failed with status {resp.status_code}")
                return None
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"{self.name} weather lookup error: {e}")
            return None
