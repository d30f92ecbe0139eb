"""
Device location handling for report submission.

Geolocation happens on the client. When the client sends no coordinates, or
reports a geolocation failure, the configured demo coordinate is used so the
submission can proceed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.settings import settings
from app.models.report import LocationError, LocationSource

logger = logging.getLogger(__name__)

LOCATION_ERROR_MESSAGES = {
    LocationError.PERMISSION_DENIED.value: "Location access denied. Please allow location permissions and try again.",
    LocationError.POSITION_UNAVAILABLE.value: "Position unavailable. Please check your device location settings.",
    LocationError.TIMEOUT.value: "Location detection timed out. Move outdoors or check device settings.",
}
DEFAULT_LOCATION_MESSAGE = "Unable to fetch your location. Using demo coordinates."


@dataclass(frozen=True)
class ResolvedLocation:
    lat: float
    lng: float
    source: str
    message: Optional[str] = None


def get_demo_location() -> ResolvedLocation:
    return ResolvedLocation(
        lat=settings.DEMO_LATITUDE,
        lng=settings.DEMO_LONGITUDE,
        source=LocationSource.FALLBACK.value,
    )


def resolve_device_location(
    latitude: Optional[float],
    longitude: Optional[float],
    location_error: Optional[str] = None,
) -> ResolvedLocation:
    """
    Use the device coordinates when present and error-free, otherwise the demo location.

    Returns:
        ResolvedLocation with source "device" or "fallback" and, for fallbacks,
        a user-facing explanation.
    """
    error = getattr(location_error, "value", location_error)
    if error is None and latitude is not None and longitude is not None:
        return ResolvedLocation(lat=latitude, lng=longitude, source=LocationSource.DEVICE.value)

    message = LOCATION_ERROR_MESSAGES.get(error, DEFAULT_LOCATION_MESSAGE)
    logger.info(f"Device location unavailable ({error or 'no coordinates'}); using demo location")
    demo = get_demo_location()
    return ResolvedLocation(
        lat=demo.lat,
        lng=demo.lng,
        source=demo.source,
        message=f"{message} Demo location used for this report.",
    )
