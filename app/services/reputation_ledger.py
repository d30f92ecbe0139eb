"""
Reputation Ledger - derives user counters from lifecycle events.

Reputation only ever grows: there is no deduction path, and counters are
updated incrementally rather than recomputed from the report set.
Persisted counters are changed with atomic deltas (see
UserService.apply_ledger_delta), never by rewriting the user document.
"""

from datetime import datetime, timezone
from typing import Dict, Optional
import logging

from app.models.user import User, UserRole, normalize_email
from app.services.status_workflow import LifecycleEvent, LifecycleEventType

logger = logging.getLogger(__name__)

INITIAL_REPUTATION = 100
SUBMISSION_REWARD = 10
RESOLUTION_REWARD = 25

SUBMISSION_DELTA = {"reports_submitted": 1, "reputation": SUBMISSION_REWARD}
RESOLUTION_DELTA = {"reports_resolved": 1, "reputation": RESOLUTION_REWARD}


class ReputationLedger:

    @staticmethod
    def new_user(email: str, name: str, role: str = UserRole.CITIZEN.value) -> User:
        """Defaults for a user authenticating for the first time."""
        now = datetime.now(timezone.utc)
        return User(
            id=normalize_email(email),
            email=normalize_email(email),
            name=name,
            role=role,
            reports_submitted=0,
            reports_resolved=0,
            reputation=INITIAL_REPUTATION,
            notifications=[],
            joined_at=now,
            last_login_at=now,
        )

    @staticmethod
    def _credit(user: User, delta: Dict[str, int], reason: str) -> User:
        for field, amount in delta.items():
            setattr(user, field, getattr(user, field) + amount)
        logger.info(f"Reputation +{delta['reputation']} for {user.email} ({reason}) → {user.reputation}")
        return user

    @classmethod
    def record_submission(cls, user: User) -> User:
        return cls._credit(user, SUBMISSION_DELTA, "submission")

    @classmethod
    def record_resolution(cls, user: User) -> User:
        return cls._credit(user, RESOLUTION_DELTA, "resolution")

    @staticmethod
    def delta_for_event(user: User, event: Optional[LifecycleEvent]) -> Optional[Dict[str, int]]:
        """
        Counter changes a lifecycle event earns the acting user.

        Only RESOLVED events carry a reward; anything else (including a
        refused transition, represented by None) earns nothing.

        Returns:
            Field → increment mapping, or None
        """
        if event is None or event.type != LifecycleEventType.RESOLVED:
            return None
        if event.actor_email and normalize_email(event.actor_email) != user.id:
            logger.warning(f"Resolution event for {event.actor_email} applied to {user.id}; ignoring")
            return None
        return dict(RESOLUTION_DELTA)

