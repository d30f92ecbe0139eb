import logging
from typing import Dict, Optional

from .base import GeocodingProvider, empty_result

logger = logging.getLogger(__name__)


class GoogleMapsProvider(GeocodingProvider):
    """
    Google Maps reverse-geocoding provider.

    Used only when GEOCODING_PROVIDER=google AND GOOGLE_MAPS_API_KEY is set.
    """

    name = "google"
    BASE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, api_key: Optional[str]):
        self.api_key = api_key

    def reverse_geocode(self, latitude: float, longitude: float) -> Dict[str, Optional[str]]:
        if not self.api_key:
            logger.info("GoogleMapsProvider called without API key; returning empty result.")
            return empty_result(self.name)

        data = self._get_json(self.BASE_URL, params={"latlng": f"{latitude},{longitude}", "key": self.api_key})
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            return empty_result(self.name)

        first = results[0]
        components = first.get("address_components") or []

        def _component(types):
            for c in components:
                if any(t in c.get("types", []) for t in types):
                    return c.get("long_name")
            return None

        return {
            "formatted_address": first.get("formatted_address"),
            "locality": _component(["sublocality", "neighborhood"]),
            "city": _component(["locality", "postal_town"]),
            "provider": self.name,
        }
