"""
HTTP client for the remote clinic API.

Credentials travel in an explicit SessionContext; nothing here reads tokens
from ambient storage.
"""

from dataclasses import dataclass
from typing import Any

import httpx

from core.config import CLINIC_API_TOKEN, CLINIC_API_URL, REQUEST_TIMEOUT_SECONDS


class ApiError(Exception):
    """Non-success response from the clinic API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthExpiredError(ApiError):
    """The access token was rejected (HTTP 401)."""


@dataclass(frozen=True)
class SessionContext:
    """Already-authorized access to the clinic API."""

    base_url: str = CLINIC_API_URL
    access_token: str | None = None

    @classmethod
    def from_config(cls, access_token: str | None = None) -> "SessionContext":
        return cls(base_url=CLINIC_API_URL, access_token=access_token or CLINIC_API_TOKEN or None)


class ApiClient:
    """Thin JSON client: one request per call, errors raised as ApiError."""

    def __init__(
        self,
        session: SessionContext,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.session = session
        self._transport = transport
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.session.access_token:
            headers["Authorization"] = f"Bearer {self.session.access_token}"
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = f"{self.session.base_url}{endpoint}"
        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
            response = await client.request(
                method, url, params=params, json=json, headers=self._headers()
            )

        # No automatic refresh, the caller has to log in again
        if response.status_code == 401:
            raise AuthExpiredError("Token expirado - faça login novamente", status_code=401)

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        if not response.is_success:
            message = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    message = body.get("message")
            except ValueError:
                pass
            if isinstance(message, list):
                message = "; ".join(str(m) for m in message)
            raise ApiError(message or f"HTTP {response.status_code}", status_code=response.status_code)

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError:
                raise ApiError("Resposta JSON inválida", status_code=response.status_code)
        return {}

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", endpoint, params=params)
