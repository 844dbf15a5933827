"""FastAPI dependencies for authentication and shared resources."""

import secrets

from fastapi import Depends, Header, HTTPException, status

from core.api_client import ApiClient, SessionContext
from core.config import CONSOLE_API_KEY
from services.appointments import fetch_appointments
from services.loader import FetchAppointments


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Verify API key from X-API-Key header.

    Raises:
        HTTPException: 401 if key is missing or invalid
    """
    if not CONSOLE_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": "INTERNAL_ERROR",
                "details": [],
            },
        )

    # Use constant-time comparison to prevent timing attacks
    if not secrets.compare_digest(x_api_key, CONSOLE_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": "UNAUTHORIZED",
                "details": [],
            },
        )

    return x_api_key


async def get_session(authorization: str | None = Header(None)) -> SessionContext:
    """
    Session for the clinic API.

    A bearer token on the incoming request is forwarded; otherwise the
    configured service token is used.
    """
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip() or None
    return SessionContext.from_config(access_token=token)


async def get_appointment_fetcher(
    session: SessionContext = Depends(get_session),
) -> FetchAppointments:
    """Appointment data source bound to the request's session."""
    client = ApiClient(session)

    async def fetch(query):
        return await fetch_appointments(client, query)

    return fetch
