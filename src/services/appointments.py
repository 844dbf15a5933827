"""
Appointment fetching from the clinic API.
"""

import math
from typing import Any

from core.api_client import ApiClient
from core.config import DEFAULT_PAGE_LIMIT
from models.appointments import AppointmentListResponse, AppointmentQuery, AppointmentRecord


def build_query_params(query: AppointmentQuery) -> dict[str, str]:
    """Drop unset values and stringify the rest."""
    return {key: str(value) for key, value in query.items() if value is not None and value != ""}


def _positive_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def normalize_list_response(raw: Any, query: AppointmentQuery) -> AppointmentListResponse:
    """
    Accept either response shape the API has used.

    - {"items": [...], "pagination": {...}} is returned unchanged
    - {"appointments" | "data": [...], "page", "limit", "total"} gets its
      pagination rebuilt
    """
    if isinstance(raw, dict) and isinstance(raw.get("items"), list):
        return raw

    obj = raw if isinstance(raw, dict) else {}
    if isinstance(obj.get("appointments"), list):
        items = obj["appointments"]
    elif isinstance(obj.get("data"), list):
        items = obj["data"]
    else:
        items = []

    page = _positive_int(obj.get("page")) or query.get("page") or 1
    limit = _positive_int(obj.get("limit")) or query.get("limit") or DEFAULT_PAGE_LIMIT
    total = _positive_int(obj.get("total")) or len(items)
    total_pages = max(1, math.ceil(total / limit))

    return {
        "items": items,
        "pagination": {"page": page, "limit": limit, "total": total, "totalPages": total_pages},
    }


async def fetch_appointments(client: ApiClient, query: AppointmentQuery) -> AppointmentListResponse:
    """Fetch one page of appointments matching the query."""
    raw = await client.get("/appointments", params=build_query_params(query))
    return normalize_list_response(raw, query)


async def get_appointment(client: ApiClient, appointment_id: str) -> AppointmentRecord:
    """Fetch a single appointment by id."""
    return await client.get(f"/appointments/{appointment_id}")
