from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging

import requests

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_SECONDS = 3.0


class GeocodingProvider(ABC):
    """
    Abstract reverse-geocoding provider.

    Contract:
    - Input: latitude, longitude (floats)
    - Output: dict with well-known keys:
      {
        "formatted_address": str | None,
        "locality": str | None,
        "city": str | None,
        "provider": str
      }
    - MUST NEVER raise upstream exceptions.
    - MUST return empty fields on failure.
    """

    name = "base"

    @abstractmethod
    def reverse_geocode(self, latitude: float, longitude: float) -> Dict[str, Optional[str]]:
        raise NotImplementedError

    def _get_json(self, url: str, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Optional[Dict[str, Any]]:
        """GET a JSON document; None on any transport or status failure."""
        try:
            resp = requests.get(url, params=params, headers=headers, timeout=HTTP_TIMEOUT_SECONDS)
            if resp.status_code != 200:
                logger.warning(f"{self.name} reverse-geocode failed with status {resp.status_code}")
                return None
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"{self.name} reverse-geocode error: {e}")
            return None


def empty_result(provider: str) -> Dict[str, Optional[str]]:
    return {
        "formatted_address": None,
        "locality": None,
        "city": None,
        "provider": provider,
    }
