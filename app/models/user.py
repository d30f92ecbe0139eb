"""
User models for identity capture and reputation tracking.
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from enum import Enum


class UserRole(str, Enum):
    CITIZEN = "citizen"
    AUTHORITY = "authority"


class UserLogin(BaseModel):
    """Identity supplied by the client when signing in."""
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$", description="Email address")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    role: UserRole = Field(default=UserRole.CITIZEN, description="citizen or authority")

    class Config:
        str_strip_whitespace = True


class User(BaseModel):
    """
    Stored user.
    reports_submitted, reports_resolved and reputation are only changed by
    the reputation ledger.
    """
    id: str = Field(..., description="Normalized email, used as the document ID")
    email: str
    name: str
    role: UserRole = UserRole.CITIZEN
    reports_submitted: int = 0
    reports_resolved: int = 0
    reputation: int = 0
    notifications: List[Dict[str, Any]] = Field(default_factory=list)
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_login_at: Optional[datetime] = None

    class Config:
        use_enum_values = True
        validate_default = True

    def to_firestore(self) -> Dict[str, Any]:
        return self.model_dump(mode="python")


def normalize_email(email: str) -> str:
    return email.strip().lower()
