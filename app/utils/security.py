"""
Request identity helpers.

Identity capture is external to this service: clients send the signed-in
user's email in the X-User-Email header and the user is looked up in
Firestore. Role checks for lifecycle actions live in the state machine,
not here.
"""

import logging
from typing import Optional

from fastapi import Header, HTTPException, status

from app.models.user import User
from app.services.user_service import get_user_service

logger = logging.getLogger(__name__)


def get_optional_user(
    user_email: Optional[str] = Header(None, alias="X-User-Email", description="Signed-in user's email"),
) -> Optional[User]:
    if not user_email:
        return None
    return get_user_service().get_user_by_email(user_email)


def get_current_user(
    user_email: Optional[str] = Header(None, alias="X-User-Email", description="Signed-in user's email"),
) -> User:
    if not user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Email header. Please sign in.",
        )
    user = get_user_service().get_user_by_email(user_email)
    if user is None:
        logger.info(f"Rejected request from unknown user: {user_email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user. Please sign in.",
        )
    return user
