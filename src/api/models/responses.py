"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    clinic_api_configured: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class EventBlockResponse(BaseModel):
    id: str
    title: str
    start: str  # ISO 8601, wall clock
    end: str
    color: str
    status: str
    category: str
    top: float
    height: float


class DayColumnResponse(BaseModel):
    date: str  # YYYY-MM-DD
    is_today: bool
    blocks: list[EventBlockResponse] = []


class StatsResponse(BaseModel):
    today: int
    week: int
    total: int
    confirmed: int


class WarningResponse(BaseModel):
    id: str
    message: str


class CalendarResponse(BaseModel):
    """One render pass of the appointment calendar."""

    anchor: str
    days: list[str]
    hours: list[int]
    row_height: int
    total_height: int
    columns: list[DayColumnResponse]
    stats: StatsResponse
    warnings: list[WarningResponse] = []
    error: str | None = None


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
