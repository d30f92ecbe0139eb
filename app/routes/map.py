"""Map routes - expose declustered report markers for the frontend map.

Markers carry display positions (spread apart when reports share a spot)
alongside the original coordinates; stored reports are never modified.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from app.models.report import IssueType
from app.services.map_service import get_map_markers
from app.services.report_service import filter_reports
from app.services.report_store import ReportStore, get_report_store
import logging

logger = logging.getLogger(__name__)


class MapMarker(BaseModel):
    id: str
    title: str
    snippet: str
    type: str
    status: str
    priority: str
    is_rainy_hazard: bool
    color: str
    icon: str
    latitude: float
    longitude: float
    original_latitude: float
    original_longitude: float
    address: Optional[str] = ""


class MapBounds(BaseModel):
    south: float
    west: float
    north: float
    east: float


class MapResponse(BaseModel):
    markers: List[MapMarker]
    bounds: Optional[MapBounds] = None


router = APIRouter(prefix="/map", tags=["Map"])


@router.get("/markers", response_model=MapResponse)
async def map_markers(
    type: Optional[IssueType] = Query(None, description="Only reports of this issue type"),
    search: Optional[str] = Query(None, max_length=200, description="Search title, description and address"),
    store: ReportStore = Depends(get_report_store),
):
    """
    All (optionally filtered) reports as map markers.

    Marker colour follows status; rain hazards get the hazard icon.
    """
    try:
        reports = filter_reports(store.list_reports(), issue_type=type, search=search)
    except Exception as e:
        logger.error(f"Failed to load reports for map: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to load map markers: {str(e)}")
    return get_map_markers(reports)
