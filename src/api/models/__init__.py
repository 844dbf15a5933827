"""API Pydantic models."""

from .responses import CalendarResponse, ErrorCodes, ErrorResponse, HealthResponse

__all__ = ["HealthResponse", "ErrorResponse", "ErrorCodes", "CalendarResponse"]
