"""
Data models for appointments and calendar layout.

Records coming from the clinic API are plain dicts, typed with TypedDict and
keyed the way the API sends them. Anything derived for display is a frozen
dataclass built fresh on every layout pass.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TypedDict


class ClientRef(TypedDict, total=False):
    """Expanded client relationship."""
    id: str
    name: str | None


class AppointmentRecord(TypedDict, total=False):
    """Appointment as returned by the clinic API."""
    id: str
    clientId: str
    client: ClientRef | None
    serviceId: str
    professionalId: str | None
    scheduledDate: str  # YYYY-MM-DD
    startTime: str  # HH:MM
    endTime: str | None  # HH:MM
    status: str
    appointmentType: str
    notes: str | None


class AppointmentQuery(TypedDict, total=False):
    """Query parameters accepted by GET /appointments."""
    status: str
    scheduledDate: str
    clientId: str
    professionalId: str
    serviceId: str
    page: int
    limit: int


class Pagination(TypedDict):
    page: int
    limit: int
    total: int
    totalPages: int


class AppointmentListResponse(TypedDict, total=False):
    items: list[AppointmentRecord]
    pagination: Pagination


class RecordProblem(TypedDict):
    """Data-quality problem found on a single record."""
    id: str
    message: str


@dataclass(frozen=True)
class LayoutEvent:
    """Appointment placed on the wall clock, ready for the grid."""

    id: str
    title: str
    start: datetime
    end: datetime
    color: str
    status: str = ""
    category: str = ""

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600
