"""
User Service - Manage users in Firestore.
"""

from firebase_admin import firestore
from app.config.firebase import get_db
from app.models.user import User, UserLogin, normalize_email
from app.services.reputation_ledger import ReputationLedger
from datetime import datetime, timezone
from typing import Optional, Dict
import logging

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


class UserService:
    """
    Service for user management in Firestore.
    Users are keyed by normalized email.
    """

    def __init__(self, db=None):
        self.db = db if db is not None else get_db()

    def get_user_by_email(self, email: Optional[str]) -> Optional[User]:
        if not email or not email.strip():
            return None
        try:
            doc = self.db.collection(USERS_COLLECTION).document(normalize_email(email)).get()
            if not doc.exists:
                return None
            return User.model_validate(self._convert_timestamps(doc.to_dict(), doc.id))
        except Exception as e:
            logger.error(f"Failed to get user by email: {str(e)}")
            return None

    def authenticate(self, login: UserLogin) -> User:
        """
        Create a user on first sign-in, otherwise refresh name, role and last login.
        Counters and reputation of an existing user are never reset here.
        """
        try:
            existing = self.get_user_by_email(login.email)
            user_ref = self.db.collection(USERS_COLLECTION).document(normalize_email(login.email))

            if existing:
                user_ref.update({
                    "name": login.name,
                    "role": login.role.value,
                    "last_login_at": firestore.SERVER_TIMESTAMP,
                })
                logger.info(f"User signed in: {existing.id}")
                return self.get_user_by_email(login.email)

            user = ReputationLedger.new_user(login.email, login.name, login.role.value)
            user_ref.set(user.to_firestore())
            logger.info(f"User created: {user.id}")
            return user

        except Exception as e:
            logger.error(f"Failed to create/update user: {str(e)}", exc_info=True)
            raise

    def apply_ledger_delta(self, user_id: str, delta: Dict[str, int]) -> Optional[User]:
        """
        Atomically add ledger deltas to a user's counters.

        Uses Firestore Increment transforms so concurrent credits (and
        re-logins touching name/role) are never overwritten.

        Returns:
            The freshly read user
        """
        try:
            self.db.collection(USERS_COLLECTION).document(user_id).update({
                field: firestore.Increment(amount) for field, amount in delta.items()
            })
        except Exception as e:
            logger.error(f"Failed to credit user {user_id} with {delta}: {str(e)}")
            raise
        logger.info(f"Credited {user_id}: {delta}")
        return self.get_user_by_email(user_id)

    def save_user(self, user: User) -> User:
        """Write the whole user document (seeding only; counters go through apply_ledger_delta)."""
        try:
            self.db.collection(USERS_COLLECTION).document(user.id).set(user.to_firestore())
            return user
        except Exception as e:
            logger.error(f"Failed to save user {user.id}: {str(e)}")
            raise

    def _convert_timestamps(self, user_data: Dict, doc_id: str) -> Dict:
        """
        Convert Firestore timestamps to aware datetimes.
        Unknown values (e.g. unresolved sentinels) fall back to the current time.
        """
        user_data = dict(user_data or {})
        user_data["id"] = doc_id
        for field in ("joined_at", "last_login_at"):
            value = user_data.get(field)
            if value is None or isinstance(value, datetime):
                continue
            if hasattr(value, "to_datetime"):
                user_data[field] = value.to_datetime()
            else:
                logger.warning(f"Unknown {field} type: {type(value)}, using current time")
                user_data[field] = datetime.now(timezone.utc)
        return user_data


# Global service instance (singleton pattern)
_user_service = None


def get_user_service() -> UserService:
    """
    Get or create UserService singleton instance.

    Returns:
        UserService: The global user service instance
    """
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
