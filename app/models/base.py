"""
Pydantic response envelopes shared by the API routes.

DESIGN PRINCIPLE:
- Models reflect data structure, not business logic
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import List, Optional

from app.models.report import Report
from app.models.user import User


class BaseResponse(BaseModel):
    """
    Base response model for API responses.
    All API responses can extend this for consistency.
    """
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SubmissionResponse(BaseResponse):
    """A newly created report and the submitter's updated counters."""
    report: Report
    user: User
    notices: List[str] = Field(default_factory=list, description="Fallbacks applied during submission")


class TransitionResponse(BaseResponse):
    """
    Result of an authority action.
    applied=False means the lifecycle refused the transition and nothing changed.
    """
    applied: bool
    report: Report
    user: User
