"""
Report Store - explicit read/write access to the reports collection.

The store is the only component that talks to Firestore about reports.
Lifecycle operations run through apply_transition so the state machine's
precondition checks are never bypassed.
"""

from firebase_admin import firestore
from google.api_core.exceptions import NotFound
from app.config.firebase import get_db
from app.models.report import Report
from app.models.user import User
from app.services.status_workflow import LifecycleEvent, ReportLifecycle
from typing import Any, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

REPORTS_COLLECTION = "reports"


class ReportStore:

    TRANSITIONS = {
        "approve": ReportLifecycle.approve,
        "resolve": ReportLifecycle.resolve,
    }

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    @property
    def collection(self):
        return self.db.collection(REPORTS_COLLECTION)

    def new_report_id(self) -> str:
        return self.collection.document().id

    def _to_report(self, doc) -> Optional[Report]:
        data = doc.to_dict()
        if not data:
            return None
        data["id"] = doc.id
        try:
            return Report.model_validate(data)
        except ValueError as e:
            logger.warning(f"Skipping malformed report document {doc.id}: {e}")
            return None

    def list_reports(self) -> List[Report]:
        reports = []
        for doc in self.collection.stream():
            report = self._to_report(doc)
            if report is not None:
                reports.append(report)
        return reports

    def get_report(self, report_id: str) -> Optional[Report]:
        doc = self.collection.document(report_id).get()
        if not doc.exists:
            return None
        return self._to_report(doc)

    def save_report(self, report: Report) -> Report:
        try:
            self.collection.document(report.id).set(report.to_firestore())
            logger.info(f"Report saved to Firestore: {report.id}")
        except Exception as e:
            logger.error(f"Failed to save report {report.id}: {e}", exc_info=True)
            raise
        return report

    def update_report(self, report_id: str, fields: Dict[str, Any]) -> None:
        """Partial update; last write wins."""
        self.collection.document(report_id).update(fields)

    def increment_views(self, report_id: str) -> Optional[Report]:
        """
        Count one view with an atomic increment so concurrent viewers and
        unrelated field updates never lose a count.

        Returns:
            The re-read report, or None if it does not exist
        """
        try:
            self.update_report(report_id, {"views": firestore.Increment(1)})
        except NotFound:
            return None
        return self.get_report(report_id)

    def apply_transition(
        self, report_id: str, op: str, actor: Optional[User]
    ) -> Tuple[Optional[Report], Optional[LifecycleEvent]]:
        """
        Load a report, run a lifecycle operation on it and persist the changed fields.

        Args:
            report_id: Report to transition
            op: "approve" or "resolve"
            actor: Acting user

        Returns:
            (report, event). report is None when it does not exist; event is
            None when the lifecycle refused the transition (nothing is written).
        """
        if op not in self.TRANSITIONS:
            raise ValueError(f"Unknown lifecycle operation: {op}")

        report = self.get_report(report_id)
        if report is None:
            return None, None

        event = self.TRANSITIONS[op](report, actor)
        if event is not None:
            self.update_report(report_id, dict(event.changes))
        return report, event


# Global store instance (singleton pattern)
_report_store = None


def get_report_store() -> ReportStore:
    global _report_store
    if _report_store is None:
        _report_store = ReportStore()
    return _report_store
