"""
Seed script for the Civic Pulse mock DB or Firestore.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured DB: python scripts/seed_db.py --apply
  - Force mock DB even if Firebase is configured: python scripts/seed_db.py --apply --force-mock

Behavior:
  - Creates a demo citizen and a demo authority.
  - The last demo report is approved and resolved by the authority.
  - Creates demo reports, several of them sharing one coordinate so the map
    declustering is visible. Priority and hazard flag come from the hazard
    classifier with a fixed weather snapshot per report.
"""

import argparse
from datetime import datetime, timedelta, timezone

from app.core.settings import settings
from app.models.report import Location, Report
from app.models.weather import WeatherSnapshot
from app.services.hazard_classifier import classify
from app.services.reputation_ledger import ReputationLedger
from app.services.status_workflow import ReportLifecycle

DEMO_CITIZEN = ("asha@example.com", "Asha", "citizen")
DEMO_AUTHORITY = ("ward.office@example.com", "Ward Office", "authority")

# (type, title, description, lat, lng, address, condition)
DEMO_REPORTS = [
    ("pothole", "Deep pothole near bus stop", "Two-wheelers swerve into traffic to avoid it.",
     12.97160, 77.59460, "MG Road Bus Stop, Bengaluru", "rain"),
    ("manhole", "Open manhole on footpath", "Cover missing since last week, no barricade.",
     12.97160, 77.59460, "MG Road Bus Stop, Bengaluru", "clear"),
    ("streetlight", "Streetlight out", "Whole stretch is dark after 7pm.",
     12.97160, 77.59460, "MG Road Bus Stop, Bengaluru", "rain"),
    ("water-leak", "Pipeline leak", "Clean water flowing into the drain for two days.",
     12.93520, 77.62450, "Koramangala 5th Block, Bengaluru", "drizzle"),
    ("waste", "Garbage dumped on corner", "Construction debris and household waste piling up.",
     12.95920, 77.64890, "Indiranagar 100 Feet Road, Bengaluru", "clouds"),
]


def build_seed():
    citizen = ReputationLedger.new_user(*DEMO_CITIZEN)
    authority = ReputationLedger.new_user(*DEMO_AUTHORITY)

    reports = []
    start = datetime.now(timezone.utc) - timedelta(hours=len(DEMO_REPORTS))
    for index, (issue_type, title, description, lat, lng, address, condition) in enumerate(DEMO_REPORTS):
        weather = WeatherSnapshot(condition=condition, provider="seed")
        assessment = classify(issue_type, weather)
        reports.append(Report(
            id=f"seed-{index + 1:03d}",
            type=issue_type,
            title=title,
            description=description,
            location=Location(lat=lat, lng=lng, address=address),
            priority=assessment.priority,
            is_rainy_hazard=assessment.is_rainy_hazard,
            weather=weather,
            image_url=f"https://example.com/seed/{issue_type}.jpg",
            reported_by=citizen.name,
            reported_by_email=citizen.email,
            reported_at=start + timedelta(hours=index),
        ))
        ReputationLedger.record_submission(citizen)

    # Walk the last report through the full lifecycle so the dashboard shows a resolution
    resolved = reports[-1]
    ReportLifecycle.approve(resolved, authority)
    if ReputationLedger.delta_for_event(authority, ReportLifecycle.resolve(resolved, authority)):
        ReputationLedger.record_resolution(authority)

    return [citizen, authority], reports


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--force-mock", action="store_true", help="Force use of mock DB even if Firebase is configured")
    args = parser.parse_args()

    users, reports = build_seed()
    for user in users:
        print(f"Preparing: users/{user.id} (role={user.role}, reputation={user.reputation})")
    for report in reports:
        print(f"Preparing: reports/{report.id} ({report.type}, priority={report.priority}, hazard={report.is_rainy_hazard})")

    if not args.apply:
        print("Dry run complete. Re-run with --apply to write to DB.")
        return

    if args.force_mock:
        print("Forcing mock DB usage for this run.")
        settings.USE_MOCK_DB = True

    from app.services.report_store import ReportStore
    from app.services.user_service import UserService

    store = ReportStore()
    user_service = UserService()
    for user in users:
        user_service.save_user(user)
        print(f"Wrote: users/{user.id}")
    for report in reports:
        store.save_report(report)
        print(f"Wrote: reports/{report.id}")
    print("Seeding completed.")


if __name__ == "__main__":
    main()
