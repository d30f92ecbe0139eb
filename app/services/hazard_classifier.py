"""
Hazard Classifier - one-time weather-driven priority at submission.

Rules:
- A report is a rain hazard when it is raining AND the issue type is one
  that gets more dangerous when wet (pothole, manhole, water-leak).
- priority: critical for rain hazards, high for manholes, medium otherwise.
- Pure and total: never raises, never performs I/O. Weather lookup failures
  are handled upstream by substituting a neutral snapshot.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from app.models.report import IssueType, Priority
from app.models.weather import WeatherSnapshot, is_raining

RAIN_AMPLIFIED_TYPES = frozenset({
    IssueType.POTHOLE.value,
    IssueType.MANHOLE.value,
    IssueType.WATER_LEAK.value,
})


@dataclass(frozen=True)
class HazardAssessment:
    priority: str
    is_rainy_hazard: bool


def classify(
    issue_type: Union[IssueType, str, None],
    weather: Optional[Union[WeatherSnapshot, Mapping[str, Any]]],
) -> HazardAssessment:
    """
    Decide hazard flag and priority for a new report.

    Args:
        issue_type: IssueType or its string value
        weather: WeatherSnapshot, a mapping with a "condition" key, or None

    Returns:
        HazardAssessment(priority, is_rainy_hazard)
    """
    type_value = getattr(issue_type, "value", issue_type)
    if not isinstance(type_value, str):
        type_value = ""

    is_rainy_hazard = type_value in RAIN_AMPLIFIED_TYPES and is_raining(weather)

    if is_rainy_hazard:
        priority = Priority.CRITICAL
    elif type_value == IssueType.MANHOLE.value:
        priority = Priority.HIGH
    else:
        priority = Priority.MEDIUM

    return HazardAssessment(priority=priority.value, is_rainy_hazard=is_rainy_hazard)
