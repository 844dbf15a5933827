"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION, CLINIC_API_URL

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if unhealthy.
    """
    api_configured = CLINIC_API_URL.startswith(("http://", "https://"))
    timestamp = datetime.now(timezone.utc).isoformat()

    if api_configured:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            clinic_api_configured=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                clinic_api_configured=False,
                timestamp=timestamp,
                error="Clinic API URL not configured",
            ).model_dump(),
        )
