import logging
from typing import Dict, Optional

from .base import GeocodingProvider, empty_result

logger = logging.getLogger(__name__)


class NominatimProvider(GeocodingProvider):
    """
    OpenStreetMap Nominatim reverse-geocoding provider.

    - No API key required.
    - Sends a User-Agent header as required by the Nominatim usage policy.
    """

    name = "nominatim"
    BASE_URL = "https://nominatim.openstreetmap.org/reverse"

    def __init__(self, user_agent: str = "civic-pulse/0.1"):
        self.user_agent = user_agent

    def reverse_geocode(self, latitude: float, longitude: float) -> Dict[str, Optional[str]]:
        data = self._get_json(
            self.BASE_URL,
            params={"lat": latitude, "lon": longitude, "format": "json", "addressdetails": 1},
            headers={"User-Agent": self.user_agent},
        )
        if not data or not isinstance(data, dict):
            return empty_result(self.name)

        address = data.get("address") or {}
        return {
            "formatted_address": data.get("display_name"),
            "locality": (
                address.get("suburb")
                or address.get("neighbourhood")
                or address.get("quarter")
                or address.get("road")
            ),
            "city": address.get("city") or address.get("town") or address.get("village"),
            "provider": self.name,
        }
