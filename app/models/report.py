"""
Pydantic models for civic issue reports.
These models handle validation for report submission, storage and responses.
"""

from pydantic import BaseModel, Field, model_validator
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from enum import Enum

from app.models.weather import WeatherSnapshot


class IssueType(str, Enum):
    """Closed set of issue categories a citizen can report."""
    POTHOLE = "pothole"
    STREETLIGHT = "streetlight"
    WATER_LEAK = "water-leak"
    WASTE = "waste"
    MANHOLE = "manhole"


class ReportStatus(str, Enum):
    """
    Report lifecycle.

    States must be traversed in order:
    pending → in-progress → resolved
    """
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class Priority(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LocationError(str, Enum):
    """Why the client could not provide a device location."""
    PERMISSION_DENIED = "permission-denied"
    POSITION_UNAVAILABLE = "position-unavailable"
    TIMEOUT = "timeout"


class LocationSource(str, Enum):
    DEVICE = "device"
    FALLBACK = "fallback"


class Location(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: str = ""


class ReportCreate(BaseModel):
    """
    Model for creating a new report (incoming POST request).
    Coordinates come from the device; when they are missing or the device
    reported an error, the server substitutes the demo location.
    """
    type: IssueType = Field(..., description="Issue category")
    title: str = Field(..., min_length=1, max_length=200, description="Short summary of the issue")
    description: str = Field(..., min_length=1, max_length=2000, description="What the citizen observed")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Device latitude")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Device longitude")
    location_error: Optional[LocationError] = Field(None, description="Geolocation failure reported by the device")
    image_url: str = Field(..., min_length=1, max_length=2000, description="Photo of the issue (required)")

    class Config:
        str_strip_whitespace = True
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "type": "pothole",
                "title": "Deep pothole near bus stop",
                "description": "Two-wheelers are swerving into traffic to avoid it.",
                "latitude": 12.9716,
                "longitude": 77.5946,
                "image_url": "https://example.com/photo.jpg",
            }
        }


class Report(BaseModel):
    """
    A stored report.

    Core fields (type, title, description, location, priority,
    is_rainy_hazard, reporter, reported_at) are written once at creation.
    status, resolved_at and resolved_by only change through the lifecycle.
    Engagement fields are carried through persistence untouched.
    """
    id: str
    type: IssueType
    title: str
    description: str
    location: Location
    location_source: LocationSource = LocationSource.DEVICE
    status: ReportStatus = ReportStatus.PENDING
    priority: Priority = Priority.MEDIUM
    is_rainy_hazard: bool = False
    weather: Optional[WeatherSnapshot] = None
    image_url: Optional[str] = None
    reported_by: str
    reported_by_email: str
    reported_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    # Engagement metadata
    views: int = 0
    upvotes: int = 0
    downvotes: int = 0
    voted_by: List[str] = Field(default_factory=list)
    comments: List[Dict[str, Any]] = Field(default_factory=list)
    share_count: int = 0
    tags: List[str] = Field(default_factory=list)

    class Config:
        use_enum_values = True
        validate_default = True

    @model_validator(mode="before")
    @classmethod
    def fill_legacy_defaults(cls, data: Any) -> Any:
        """Documents written before engagement fields existed come back as None."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("views", "upvotes", "downvotes", "share_count"):
            if data.get(key) is None:
                data[key] = 0
        for key in ("voted_by", "comments"):
            if data.get(key) is None:
                data[key] = []
        if not data.get("tags") and data.get("type"):
            issue_type = data["type"]
            data["tags"] = [getattr(issue_type, "value", issue_type)]
        return data

    def to_firestore(self) -> Dict[str, Any]:
        return self.model_dump(mode="python")


class ReportStats(BaseModel):
    """Dashboard counters over a report set."""
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    resolved: int = 0
    critical: int = Field(0, description="Reports flagged as rain hazards")
