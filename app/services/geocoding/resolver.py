import logging
from typing import Optional

from app.core.settings import settings
from .base import GeocodingProvider
from .nominatim_provider import NominatimProvider
from .google_provider import GoogleMapsProvider

logger = logging.getLogger(__name__)

_provider_instance: Optional[GeocodingProvider] = None


def get_geocoding_provider() -> GeocodingProvider:
    """
    Resolve the active geocoding provider based on settings.

    - Default: Nominatim (no API key required).
    - GEOCODING_PROVIDER='google' with GOOGLE_MAPS_API_KEY set: Google.
    """
    global _provider_instance
    if _provider_instance is not None:
        return _provider_instance

    provider_name = (settings.GEOCODING_PROVIDER or "nominatim").lower()

    if provider_name == "google" and settings.GOOGLE_MAPS_API_KEY:
        _provider_instance = GoogleMapsProvider(api_key=settings.GOOGLE_MAPS_API_KEY)
    else:
        if provider_name not in ("nominatim", "google"):
            logger.warning(f"Unknown GEOCODING_PROVIDER '{provider_name}', using nominatim")
        _provider_instance = NominatimProvider()

    logger.info(f"Geocoding provider initialized: {_provider_instance.name}")
    return _provider_instance


def fallback_address(latitude: float, longitude: float) -> str:
    return f"Lat: {latitude:.4f}, Lng: {longitude:.4f}"


def reverse_geocode(latitude: float, longitude: float) -> str:
    """
    Human-readable address for a coordinate.
    Never raises: an empty provider result yields the coordinate fallback.
    """
    result = get_geocoding_provider().reverse_geocode(latitude, longitude)
    address = result.get("formatted_address")
    if not address:
        logger.info(f"No address from {result.get('provider')} for ({latitude}, {longitude}); using fallback")
        return fallback_address(latitude, longitude)
    return address
