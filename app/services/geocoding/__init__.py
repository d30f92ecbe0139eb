"""
Reverse geocoding for report addresses.

Providers never raise; the resolver substitutes a coordinate-based
fallback address when no provider result is available.
"""

from app.services.geocoding.base import GeocodingProvider
from app.services.geocoding.google_provider import GoogleMapsProvider
from app.services.geocoding.nominatim_provider import NominatimProvider
from app.services.geocoding.resolver import fallback_address, get_geocoding_provider, reverse_geocode

__all__ = [
    "GeocodingProvider",
    "GoogleMapsProvider",
    "NominatimProvider",
    "fallback_address",
    "get_geocoding_provider",
    "reverse_geocode",
]
