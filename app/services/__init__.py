"""
Services layer - Business logic goes here.
Keep services focused on specific domains (reports, users, map, lookups).

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Hazard classification runs once, at submission
- Lifecycle changes go through ReportLifecycle only
- External lookups (address, weather) always degrade to a fallback
"""
