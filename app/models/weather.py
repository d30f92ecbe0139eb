"""
Weather snapshot captured at report submission time.
"""

from pydantic import BaseModel, Field
from typing import Any, Mapping, Optional, Union


RAIN_CONDITIONS = {"drizzle", "rain", "thunderstorm"}


class WeatherSnapshot(BaseModel):
    """
    Current conditions at the report coordinates.

    condition is one of: clear, clouds, fog, drizzle, rain, thunderstorm, snow, unknown.
    """
    condition: str = Field(default="unknown", description="Normalized weather category")
    precipitation_mm: Optional[float] = Field(default=None, ge=0, description="Precipitation in the last hour (mm)")
    provider: Optional[str] = Field(default=None, description="Which provider produced the snapshot")


def neutral_weather(provider: Optional[str] = None) -> WeatherSnapshot:
    """Snapshot used whenever a lookup fails: never indicates rain."""
    return WeatherSnapshot(condition="unknown", precipitation_mm=None, provider=provider)


def is_raining(weather: Union[WeatherSnapshot, Mapping[str, Any], None]) -> bool:
    """
    True when the condition is a rain category (case-insensitive) or any
    precipitation was measured. Accepts a snapshot, a plain mapping or None.
    """
    if weather is None:
        return False
    if isinstance(weather, Mapping):
        condition = weather.get("condition")
        precipitation = weather.get("precipitation_mm")
    else:
        condition = getattr(weather, "condition", None)
        precipitation = getattr(weather, "precipitation_mm", None)

    if isinstance(condition, str) and condition.strip().lower() in RAIN_CONDITIONS:
        return True
    try:
        return precipitation is not None and float(precipitation) > 0
    except (TypeError, ValueError):
        return False
