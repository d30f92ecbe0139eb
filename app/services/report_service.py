"""
Report service - submission flow and read-side views over the report set.

Submission is strictly sequential:
1. Resolve the device location (demo fallback on failure)
2. Reverse-geocode the address (coordinate fallback on failure)
3. Look up current weather (neutral fallback on failure)
4. Classify hazard and priority (once, never recomputed)
5. Build and save the report, then credit the submitter

External lookups are bounded by LOOKUP_TIMEOUT_SECONDS and are never retried.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple

from app.core.settings import settings
from app.models.report import Location, Report, ReportCreate, ReportStats, ReportStatus
from app.models.user import User, normalize_email
from app.models.weather import WeatherSnapshot, neutral_weather
from app.services.geocoding import fallback_address, reverse_geocode
from app.services.hazard_classifier import classify
from app.services.report_store import ReportStore, get_report_store
from app.services.reputation_ledger import SUBMISSION_DELTA
from app.services.user_service import UserService, get_user_service
from app.services.weather import check_weather
from app.utils.location import resolve_device_location

logger = logging.getLogger(__name__)

RECENT_REPORTS_LIMIT = 10


async def _bounded_lookup(name: str, func: Callable[..., Any], *args, fallback: Any) -> Tuple[Any, bool]:
    """
    Run a blocking lookup in the executor with a fixed timeout.

    Returns:
        (value, used_fallback)
    """
    loop = asyncio.get_running_loop()
    try:
        value = await asyncio.wait_for(
            loop.run_in_executor(None, func, *args),
            timeout=settings.LOOKUP_TIMEOUT_SECONDS,
        )
        return value, False
    except asyncio.TimeoutError:
        logger.warning(f"{name} lookup timed out after {settings.LOOKUP_TIMEOUT_SECONDS}s; using fallback")
    except Exception as e:
        logger.warning(f"{name} lookup failed: {e}; using fallback", exc_info=True)
    return fallback, True


async def create_report(
    report_data: ReportCreate,
    user: User,
    store: Optional[ReportStore] = None,
    user_service: Optional[UserService] = None,
) -> Tuple[Report, User, List[str]]:
    """
    Create a new citizen report.

    Args:
        report_data: Validated submission
        user: Submitting user
        store: Report store (defaults to the global store)
        user_service: User service (defaults to the global service)

    Returns:
        (report, updated user, notices describing any fallbacks applied)
    """
    store = store or get_report_store()
    user_service = user_service or get_user_service()
    notices: List[str] = []

    location = resolve_device_location(report_data.latitude, report_data.longitude, report_data.location_error)
    if location.message:
        notices.append(location.message)

    address, address_fallback = await _bounded_lookup(
        "Reverse geocoding", reverse_geocode, location.lat, location.lng,
        fallback=fallback_address(location.lat, location.lng),
    )
    if address_fallback:
        notices.append("Address lookup unavailable; coordinates used as the address.")

    weather, weather_fallback = await _bounded_lookup(
        "Weather", check_weather, location.lat, location.lng,
        fallback=neutral_weather(),
    )
    if weather_fallback or not isinstance(weather, WeatherSnapshot):
        weather = neutral_weather()
        notices.append("Weather check unavailable; report was not flagged as a rain hazard.")

    assessment = classify(report_data.type, weather)

    report = Report(
        id=store.new_report_id(),
        type=report_data.type,
        title=report_data.title,
        description=report_data.description,
        location=Location(lat=location.lat, lng=location.lng, address=address),
        location_source=location.source,
        status=ReportStatus.PENDING,
        priority=assessment.priority,
        is_rainy_hazard=assessment.is_rainy_hazard,
        weather=weather,
        image_url=report_data.image_url,
        reported_by=user.name,
        reported_by_email=user.email,
        reported_at=datetime.now(timezone.utc),
        tags=[report_data.type.value],
    )

    store.save_report(report)

    # The report is stored from here on; a failed credit must not turn into a 500
    try:
        user = user_service.apply_ledger_delta(user.id, SUBMISSION_DELTA) or user
    except Exception as e:
        logger.error(f"Report {report.id} saved but crediting {user.email} failed: {e}", exc_info=True)
        notices.append("Report saved, but your reputation could not be updated right now.")

    logger.info(
        f"Report {report.id} created: type={report.type}, priority={report.priority}, "
        f"rain_hazard={report.is_rainy_hazard}, by={user.email}"
    )
    return report, user, notices


def filter_reports(
    reports: List[Report],
    issue_type: Optional[str] = None,
    search: Optional[str] = None,
    reporter_email: Optional[str] = None,
) -> List[Report]:
    """
    Filter by issue type, by submitter and by a case-insensitive search over
    title, description and address.
    """
    query = (search or "").strip().lower()
    email = normalize_email(reporter_email) if reporter_email else None
    issue_type = getattr(issue_type, "value", issue_type)

    filtered = []
    for report in reports:
        if email and normalize_email(report.reported_by_email) != email:
            continue
        if issue_type and report.type != issue_type:
            continue
        if query and not (
            query in report.title.lower()
            or query in report.description.lower()
            or query in report.location.address.lower()
        ):
            continue
        filtered.append(report)
    return filtered


def _reported_at_utc(report: Report) -> datetime:
    if report.reported_at.tzinfo is None:
        return report.reported_at.replace(tzinfo=timezone.utc)
    return report.reported_at


def get_recent_reports(reports: List[Report], limit: int = RECENT_REPORTS_LIMIT) -> List[Report]:
    """Newest first."""
    return sorted(reports, key=_reported_at_utc, reverse=True)[:limit]


def compute_stats(reports: List[Report]) -> ReportStats:
    return ReportStats(
        total=len(reports),
        pending=sum(1 for r in reports if r.status == ReportStatus.PENDING),
        in_progress=sum(1 for r in reports if r.status == ReportStatus.IN_PROGRESS),
        resolved=sum(1 for r in reports if r.status == ReportStatus.RESOLVED),
        critical=sum(1 for r in reports if r.is_rainy_hazard),
    )
