"""
Tests for the report lifecycle state machine.
"""
import pytest

from app.models.report import ReportStatus
from app.services.reputation_ledger import ReputationLedger
from app.services.status_workflow import LifecycleEventType, ReportLifecycle
from conftest import make_report


@pytest.fixture
def officer():
    return ReputationLedger.new_user("officer@city.gov", "Officer Rao", "authority")


@pytest.fixture
def resident():
    return ReputationLedger.new_user("resident@example.com", "Resident", "citizen")


class TestTransitionsTable:

    def test_allowed_transitions(self):
        assert ReportLifecycle.get_allowed_transitions("pending") == ["in-progress"]
        assert ReportLifecycle.get_allowed_transitions("in-progress") == ["resolved"]
        assert ReportLifecycle.get_allowed_transitions("resolved") == []
        assert ReportLifecycle.get_allowed_transitions("bogus") == []

    @pytest.mark.parametrize("from_status,to_status", [
        ("pending", "resolved"),
        ("in-progress", "pending"),
        ("resolved", "in-progress"),
        ("pending", "pending"),
        ("pending", "closed"),
    ])
    def test_invalid_transitions(self, from_status, to_status):
        assert ReportLifecycle.is_valid_transition(from_status, to_status) is False


class TestApprove:

    def test_authority_approves_pending(self, officer):
        report = make_report()
        event = ReportLifecycle.approve(report, officer)

        assert report.status == ReportStatus.IN_PROGRESS
        assert event.type == LifecycleEventType.APPROVED
        assert event.changes == {"status": "in-progress"}
        assert report.resolved_at is None
        assert report.resolved_by is None

    def test_citizen_cannot_approve(self, resident):
        report = make_report()
        assert ReportLifecycle.approve(report, resident) is None
        assert report.status == ReportStatus.PENDING

    def test_anonymous_cannot_approve(self):
        report = make_report()
        assert ReportLifecycle.approve(report, None) is None
        assert report.status == ReportStatus.PENDING

    @pytest.mark.parametrize("status", ["in-progress", "resolved"])
    def test_approve_non_pending_is_noop(self, officer, status):
        report = make_report(status=status)
        before = report.model_dump()
        assert ReportLifecycle.approve(report, officer) is None
        assert report.model_dump() == before


class TestResolve:

    def test_authority_resolves_in_progress(self, officer):
        report = make_report(status="in-progress")
        event = ReportLifecycle.resolve(report, officer)

        assert report.status == ReportStatus.RESOLVED
        assert report.resolved_by == "Officer Rao"
        assert report.resolved_at is not None
        assert event.type == LifecycleEventType.RESOLVED
        assert event.actor_email == officer.email
        assert event.changes["resolved_at"] == report.resolved_at

    def test_resolve_pending_is_noop(self, officer):
        report = make_report()
        assert ReportLifecycle.resolve(report, officer) is None
        assert report.status == ReportStatus.PENDING
        assert report.resolved_at is None
        assert report.resolved_by is None

    def test_resolve_twice_keeps_first_metadata(self, officer):
        report = make_report(status="in-progress")
        ReportLifecycle.resolve(report, officer)
        first = (report.resolved_at, report.resolved_by)

        other = ReputationLedger.new_user("other@city.gov", "Other Officer", "authority")
        assert ReportLifecycle.resolve(report, other) is None
        assert (report.resolved_at, report.resolved_by) == first

    def test_citizen_cannot_resolve(self, resident):
        report = make_report(status="in-progress")
        assert ReportLifecycle.resolve(report, resident) is None
        assert report.status == ReportStatus.IN_PROGRESS
        assert report.resolved_at is None

    def test_full_path(self, officer):
        report = make_report()
        assert ReportLifecycle.resolve(report, officer) is None
        assert ReportLifecycle.approve(report, officer) is not None
        assert ReportLifecycle.approve(report, officer) is None
        assert ReportLifecycle.resolve(report, officer) is not None
        assert report.status == ReportStatus.RESOLVED


class TestRecordView:

    def test_views_accumulate_in_any_state(self, officer):
        report = make_report()
        ReportLifecycle.record_view(report)
        ReportLifecycle.approve(report, officer)
        ReportLifecycle.record_view(report)
        ReportLifecycle.record_view(report)

        assert report.views == 3
        assert report.status == ReportStatus.IN_PROGRESS
