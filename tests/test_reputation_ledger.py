"""
Tests for reputation accrual.
"""
from app.services.reputation_ledger import (
    INITIAL_REPUTATION,
    RESOLUTION_DELTA,
    ReputationLedger,
)
from app.services.status_workflow import ReportLifecycle
from conftest import make_report


def test_new_user_defaults():
    user = ReputationLedger.new_user("  New@Example.com ", "New")
    assert user.id == "new@example.com"
    assert user.reputation == INITIAL_REPUTATION == 100
    assert user.reports_submitted == 0
    assert user.reports_resolved == 0
    assert user.notifications == []
    assert user.role == "citizen"


def test_submission_then_resolution():
    user = ReputationLedger.new_user("chief@city.gov", "Chief", "authority")

    ReputationLedger.record_submission(user)
    assert user.reputation == 110
    assert user.reports_submitted == 1

    report = make_report(reported_by_email=user.email)
    ReportLifecycle.approve(report, user)
    event = ReportLifecycle.resolve(report, user)

    assert ReputationLedger.delta_for_event(user, event) == RESOLUTION_DELTA
    ReputationLedger.record_resolution(user)
    assert user.reputation == 135
    assert user.reports_resolved == 1


def test_refused_or_non_resolution_events_earn_nothing():
    user = ReputationLedger.new_user("chief@city.gov", "Chief", "authority")
    report = make_report()
    approve_event = ReportLifecycle.approve(report, user)

    assert ReputationLedger.delta_for_event(user, None) is None
    assert ReputationLedger.delta_for_event(user, approve_event) is None
    assert user.reputation == 100


def test_resolution_event_for_another_user_is_ignored():
    chief = ReputationLedger.new_user("chief@city.gov", "Chief", "authority")
    bystander = ReputationLedger.new_user("bystander@example.com", "Bystander")
    report = make_report(status="in-progress")
    event = ReportLifecycle.resolve(report, chief)

    assert ReputationLedger.delta_for_event(bystander, event) is None


def test_delta_is_a_copy():
    chief = ReputationLedger.new_user("chief@city.gov", "Chief", "authority")
    report = make_report(status="in-progress")
    delta = ReputationLedger.delta_for_event(chief, ReportLifecycle.resolve(report, chief))
    delta["reputation"] = 0
    assert RESOLUTION_DELTA["reputation"] == 25
