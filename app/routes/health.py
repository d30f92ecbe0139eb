"""
Health endpoints for Civic Pulse.

/health answers without touching Firestore; /health/db reads one document
from each collection the report flow depends on.
"""

from fastapi import APIRouter, HTTPException
from app.config.firebase import get_db
from app.core.settings import settings
from app.services.report_store import REPORTS_COLLECTION
from app.services.user_service import USERS_COLLECTION
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """Process is up. Also reports which lookup providers are configured."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "geocoding_provider": settings.GEOCODING_PROVIDER,
        "weather_provider": settings.WEATHER_PROVIDER,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/db")
async def database_health():
    """
    Firestore round trip over the reports and users collections.
    503 if either read fails.
    """
    try:
        db = get_db()
        readable = {}
        for name in (REPORTS_COLLECTION, USERS_COLLECTION):
            list(db.collection(name).limit(1).stream())
            readable[name] = True
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail=f"Database connection failed: {str(e)}"
        )

    return {
        "status": "healthy",
        "database": "mock-firestore" if settings.USE_MOCK_DB else "firestore",
        "connected": True,
        "collections": readable,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
