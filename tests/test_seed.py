"""
Tests for the demo seed data.
"""
from scripts.seed_db import DEMO_REPORTS, build_seed


def test_seed_users_carry_earned_reputation():
    (citizen, authority), reports = build_seed()

    assert citizen.reports_submitted == len(DEMO_REPORTS)
    assert citizen.reputation == 100 + 10 * len(DEMO_REPORTS)
    assert (authority.reputation, authority.reports_resolved) == (125, 1)


def test_seed_reports_are_classified_and_resolved_through_lifecycle():
    _, reports = build_seed()
    by_type = {r.type: r for r in reports}

    assert by_type["pothole"].priority == "critical"
    assert by_type["manhole"].priority == "high"
    assert by_type["streetlight"].is_rainy_hazard is False
    assert all(r.image_url for r in reports)

    resolved = reports[-1]
    assert resolved.status == "resolved"
    assert resolved.resolved_by == "Ward Office"
    assert [r.status for r in reports[:-1]] == ["pending"] * (len(reports) - 1)
