"""
Report Lifecycle - strict state machine with role-gated transitions.

DESIGN PRINCIPLES:
- No skipping states
- No backward transitions
- Only authorities advance a report
- Refused transitions are silent no-ops (logged, never raised), so a stale
  button in a client can never corrupt a report
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional
import logging

from app.models.report import Report, ReportStatus
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


class LifecycleEventType(str, Enum):
    APPROVED = "approved"
    RESOLVED = "resolved"
    VIEWED = "viewed"


@dataclass(frozen=True)
class LifecycleEvent:
    """Emitted by a successful lifecycle operation."""
    type: LifecycleEventType
    report_id: str
    actor_email: Optional[str]
    changes: Dict[str, object]
    occurred_at: datetime


class ReportLifecycle:
    """
    Rules:
    - pending → in-progress (approve, authority only)
    - in-progress → resolved (resolve, authority only)
    - resolved is terminal
    """

    ALLOWED_TRANSITIONS: Dict[ReportStatus, List[ReportStatus]] = {
        ReportStatus.PENDING: [ReportStatus.IN_PROGRESS],
        ReportStatus.IN_PROGRESS: [ReportStatus.RESOLVED],
        ReportStatus.RESOLVED: [],
    }

    @classmethod
    def is_valid_transition(cls, from_status: str, to_status: str) -> bool:
        try:
            from_enum = ReportStatus(from_status)
            to_enum = ReportStatus(to_status)
        except ValueError:
            return False
        return to_enum in cls.ALLOWED_TRANSITIONS.get(from_enum, [])

    @classmethod
    def get_allowed_transitions(cls, current_status: str) -> List[str]:
        try:
            current_enum = ReportStatus(current_status)
        except ValueError:
            return []
        return [status.value for status in cls.ALLOWED_TRANSITIONS.get(current_enum, [])]

    @classmethod
    def _can_advance(cls, report: Report, acting_user: Optional[User], to_status: ReportStatus) -> bool:
        if acting_user is None or acting_user.role != UserRole.AUTHORITY:
            logger.info(
                f"Refused {report.status} → {to_status.value} on report {report.id}: "
                f"{getattr(acting_user, 'email', 'anonymous')} is not an authority"
            )
            return False
        if not cls.is_valid_transition(report.status, to_status.value):
            logger.info(
                f"Refused {report.status} → {to_status.value} on report {report.id}: "
                f"allowed from {report.status}: {cls.get_allowed_transitions(report.status)}"
            )
            return False
        return True

    @classmethod
    def approve(cls, report: Report, acting_user: Optional[User]) -> Optional[LifecycleEvent]:
        """
        Move a pending report to in-progress.

        Returns:
            LifecycleEvent on success, None if the preconditions do not hold
            (the report is left untouched).
        """
        if not cls._can_advance(report, acting_user, ReportStatus.IN_PROGRESS):
            return None

        report.status = ReportStatus.IN_PROGRESS.value
        logger.info(f"Report {report.id} approved by {acting_user.email}")
        return LifecycleEvent(
            type=LifecycleEventType.APPROVED,
            report_id=report.id,
            actor_email=acting_user.email,
            changes={"status": report.status},
            occurred_at=datetime.now(timezone.utc),
        )

    @classmethod
    def resolve(cls, report: Report, acting_user: Optional[User]) -> Optional[LifecycleEvent]:
        """
        Move an in-progress report to resolved and stamp resolution metadata.

        Returns:
            LifecycleEvent of type RESOLVED on success (consumed by the
            reputation ledger), None if the preconditions do not hold.
        """
        if not cls._can_advance(report, acting_user, ReportStatus.RESOLVED):
            return None

        now = datetime.now(timezone.utc)
        report.status = ReportStatus.RESOLVED.value
        report.resolved_at = now
        report.resolved_by = acting_user.name
        logger.info(f"Report {report.id} resolved by {acting_user.email}")
        return LifecycleEvent(
            type=LifecycleEventType.RESOLVED,
            report_id=report.id,
            actor_email=acting_user.email,
            changes={
                "status": report.status,
                "resolved_at": report.resolved_at,
                "resolved_by": report.resolved_by,
            },
            occurred_at=now,
        )

    @classmethod
    def record_view(cls, report: Report) -> LifecycleEvent:
        """Count a view. Allowed in every state; status is not touched."""
        report.views += 1
        return LifecycleEvent(
            type=LifecycleEventType.VIEWED,
            report_id=report.id,
            actor_email=None,
            changes={"views": report.views},
            occurred_at=datetime.now(timezone.utc),
        )
