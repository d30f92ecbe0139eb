"""
Map service - turn stored reports into map markers for the frontend.

Reports that share a coordinate (rounded to 5 decimals, ~1.1 m) are spread
around the original point: up to 8 markers on a ring at 45° steps, then a
second ring at twice the radius, and so on.

Positions are computed on every request and never persisted. Offsets depend
on input order, so get_map_markers sorts by (reported_at, id) first.
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple
import math

from app.models.report import IssueType, Report, ReportStatus

RING_SIZE = 8
RING_RADIUS_DEGREES = 0.00015
GROUPING_PRECISION = 5
SNIPPET_LENGTH = 100

STATUS_COLORS = {
    ReportStatus.PENDING.value: "#EAB308",
    ReportStatus.IN_PROGRESS.value: "#3B82F6",
    ReportStatus.RESOLVED.value: "#10B981",
}

ISSUE_ICONS = {
    IssueType.POTHOLE.value: "🕳️",
    IssueType.STREETLIGHT.value: "💡",
    IssueType.WATER_LEAK.value: "💧",
    IssueType.WASTE.value: "🗑️",
    IssueType.MANHOLE.value: "⚠️",
}

HAZARD_ICON = "🚨"


@dataclass(frozen=True)
class MapPosition:
    lat: float
    lng: float


def _group_key(lat: float, lng: float) -> Tuple[str, str]:
    return (f"{lat:.{GROUPING_PRECISION}f}", f"{lng:.{GROUPING_PRECISION}f}")


def ring_offset(lat: float, lng: float, index: int) -> MapPosition:
    """Position of the index-th marker around (lat, lng)."""
    angle = (index % RING_SIZE) * (math.pi / 4)
    radius = RING_RADIUS_DEGREES * math.ceil((index + 1) / RING_SIZE)
    return MapPosition(
        lat=lat + math.cos(angle) * radius,
        lng=lng + math.sin(angle) * radius,
    )


def decluster_positions(reports: Iterable[Report]) -> Dict[str, MapPosition]:
    """
    Compute a rendering position per report.

    Args:
        reports: Reports in the order markers should be assigned

    Returns:
        Mapping of report id to MapPosition
    """
    groups: "OrderedDict[Tuple[str, str], List[Report]]" = OrderedDict()
    for report in reports:
        key = _group_key(report.location.lat, report.location.lng)
        groups.setdefault(key, []).append(report)

    positions: Dict[str, MapPosition] = {}
    for reports_at_location in groups.values():
        for index, report in enumerate(reports_at_location):
            positions[report.id] = ring_offset(report.location.lat, report.location.lng, index)
    return positions


def _stable_order_key(report: Report) -> Tuple[datetime, str]:
    reported_at = report.reported_at
    if reported_at.tzinfo is None:
        reported_at = reported_at.replace(tzinfo=timezone.utc)
    return (reported_at, report.id)


def compute_bounds(reports: List[Report]) -> Optional[Dict[str, float]]:
    """Bounding box of the original coordinates, or None for an empty set."""
    if not reports:
        return None
    lats = [r.location.lat for r in reports]
    lngs = [r.location.lng for r in reports]
    return {"south": min(lats), "west": min(lngs), "north": max(lats), "east": max(lngs)}


def build_marker(report: Report, position: MapPosition) -> Dict[str, Any]:
    description = report.description
    if len(description) > SNIPPET_LENGTH:
        description = description[:SNIPPET_LENGTH] + "..."

    return {
        "id": report.id,
        "title": report.title,
        "snippet": description,
        "type": report.type,
        "status": report.status,
        "priority": report.priority,
        "is_rainy_hazard": report.is_rainy_hazard,
        "color": STATUS_COLORS.get(report.status, STATUS_COLORS[ReportStatus.PENDING.value]),
        "icon": HAZARD_ICON if report.is_rainy_hazard else ISSUE_ICONS.get(report.type, "📍"),
        "latitude": position.lat,
        "longitude": position.lng,
        "original_latitude": report.location.lat,
        "original_longitude": report.location.lng,
        "address": report.location.address,
    }


def get_map_markers(reports: List[Report]) -> Dict[str, Any]:
    """
    Build the map payload: declustered markers plus the bounds to fit.
    """
    ordered = sorted(reports, key=_stable_order_key)
    positions = decluster_positions(ordered)
    markers = [build_marker(report, positions[report.id]) for report in ordered]
    return {"markers": markers, "bounds": compute_bounds(ordered)}
