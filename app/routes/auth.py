"""
Authentication endpoints - identity capture (email, name, role).
"""

from fastapi import APIRouter, Depends, HTTPException, status
from app.models.user import User, UserLogin
from app.services.user_service import get_user_service
from app.utils.security import get_current_user
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=User)
async def login(request: UserLogin):
    """
    Sign in, creating the user on first login.

    New users start with reputation 100, zero counters and no notifications.
    Returning users keep their counters; name and role are refreshed.
    """
    try:
        return get_user_service().authenticate(request)
    except Exception as e:
        logger.error(f"Login failed for {request.email}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Login failed: {str(e)}"
        )


@router.get("/me", response_model=User)
async def get_me(user: User = Depends(get_current_user)):
    """Current user profile, counters and reputation."""
    return user
