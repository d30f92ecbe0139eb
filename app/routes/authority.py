"""
Authority endpoints - advance reports through the lifecycle.

SCOPE:
- approve: pending → in-progress
- resolve: in-progress → resolved (credits the resolving authority)

Refused transitions (wrong role, wrong state) are not errors: the report is
returned unchanged with applied=false. Unknown reports are 404.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from app.models.base import TransitionResponse
from app.models.user import User
from app.services.report_store import ReportStore, get_report_store
from app.services.reputation_ledger import ReputationLedger
from app.services.user_service import UserService, get_user_service
from app.utils.security import get_current_user
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/authority", tags=["Authority"])


def _transition(op: str, report_id: str, user: User, store: ReportStore, user_service: UserService) -> TransitionResponse:
    try:
        report, event = store.apply_transition(report_id, op, user)
    except Exception as e:
        logger.error(f"Failed to {op} report {report_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {op} report: {str(e)}"
        )

    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report {report_id} not found")

    delta = ReputationLedger.delta_for_event(user, event)
    if delta:
        user = user_service.apply_ledger_delta(user.id, delta) or user

    applied = event is not None
    return TransitionResponse(
        success=True,
        message=None if applied else f"Report is {report.status}; {op} not allowed for role {user.role}",
        applied=applied,
        report=report,
        user=user,
    )


@router.post("/reports/{report_id}/approve", response_model=TransitionResponse)
async def approve_report(
    report_id: str,
    user: User = Depends(get_current_user),
    store: ReportStore = Depends(get_report_store),
    user_service: UserService = Depends(get_user_service),
):
    """Approve a pending report (authority only)."""
    return _transition("approve", report_id, user, store, user_service)


@router.post("/reports/{report_id}/resolve", response_model=TransitionResponse)
async def resolve_report(
    report_id: str,
    user: User = Depends(get_current_user),
    store: ReportStore = Depends(get_report_store),
    user_service: UserService = Depends(get_user_service),
):
    """Resolve an in-progress report (authority only). Stamps resolved_at and resolved_by."""
    return _transition("resolve", report_id, user, store, user_service)
