"""
Report endpoints - API routes for citizen report submission and retrieval.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.models.base import SubmissionResponse
from app.models.report import IssueType, Report, ReportCreate, ReportStats
from app.models.user import User
from app.services.report_service import (
    RECENT_REPORTS_LIMIT,
    compute_stats,
    create_report,
    filter_reports,
    get_recent_reports,
)
from app.services.report_store import ReportStore, get_report_store
from app.services.user_service import UserService, get_user_service
from app.utils.security import get_current_user, get_optional_user
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
async def submit_report(
    report: ReportCreate,
    user: User = Depends(get_current_user),
    store: ReportStore = Depends(get_report_store),
    user_service: UserService = Depends(get_user_service),
):
    """
    Submit a new citizen report.

    This endpoint:
    1. Validates the report data (422 before anything is stored)
    2. Resolves address and weather, falling back on failure
    3. Classifies hazard and priority, stores the report
    4. Credits the submitter's reputation

    Returns the created report and the updated user.
    """
    try:
        logger.info(f"POST /reports - Creating report: type={report.type.value}, by={user.email}")
        created, updated_user, notices = await create_report(report, user, store=store, user_service=user_service)
        return SubmissionResponse(
            message="Report submitted successfully!",
            report=created,
            user=updated_user,
            notices=notices,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"POST /reports - Report creation failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Report creation failed: {str(e)}"
        )


@router.get("", response_model=List[Report])
async def list_reports(
    type: Optional[IssueType] = Query(None, description="Only reports of this issue type"),
    search: Optional[str] = Query(None, max_length=200, description="Search title, description and address"),
    mine: bool = Query(False, description="Only reports submitted by the signed-in user"),
    user: Optional[User] = Depends(get_optional_user),
    store: ReportStore = Depends(get_report_store),
):
    if mine and user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sign in to see your reports.")
    try:
        reports = store.list_reports()
    except Exception as e:
        logger.error(f"Failed to retrieve reports: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve reports: {str(e)}")
    return filter_reports(
        reports,
        issue_type=type,
        search=search,
        reporter_email=user.email if mine else None,
    )


@router.get("/recent", response_model=List[Report])
async def recent_reports(
    limit: int = Query(RECENT_REPORTS_LIMIT, ge=1, le=100),
    store: ReportStore = Depends(get_report_store),
):
    """Most recently submitted reports, newest first."""
    return get_recent_reports(store.list_reports(), limit=limit)


@router.get("/stats", response_model=ReportStats)
async def report_stats(
    type: Optional[IssueType] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    store: ReportStore = Depends(get_report_store),
):
    """Counts per status plus the number of rain hazards."""
    return compute_stats(filter_reports(store.list_reports(), issue_type=type, search=search))


@router.get("/{report_id}", response_model=Report)
async def get_report(report_id: str, store: ReportStore = Depends(get_report_store)):
    report = store.get_report(report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report {report_id} not found")
    return report


@router.post("/{report_id}/view", response_model=Report)
async def record_view(report_id: str, store: ReportStore = Depends(get_report_store)):
    """Count one view of a report (e.g. when its details are opened)."""
    report = store.increment_views(report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report {report_id} not found")
    return report
