"""
Calendar data loading with latest-request-wins semantics.

The loader owns the in-memory calendar state (records, loading flag, error
message, status filter, date window). Navigation and filter changes only
update that state; the caller triggers load() afterwards.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import Awaitable, Callable

import httpx

from core.api_client import ApiError
from core.config import CALENDAR_FETCH_LIMIT, REQUEST_TIMEOUT_SECONDS
from core.validation import validate_records
from models.appointments import (
    AppointmentListResponse,
    AppointmentQuery,
    AppointmentRecord,
    LayoutEvent,
    RecordProblem,
)
from services.calendar import DayWindow, map_events
from services.layout import CalendarStats, GridLayout, build_grid, compute_stats, hour_range

FetchAppointments = Callable[[AppointmentQuery], Awaitable[AppointmentListResponse]]

DEFAULT_LOAD_ERROR = "Erro ao carregar agendamentos"
TIMEOUT_ERROR = "Tempo esgotado ao carregar agendamentos"


@dataclass
class CalendarState:
    window: DayWindow
    status: str | None = None
    client_id: str | None = None
    records: list[AppointmentRecord] = field(default_factory=list)
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class CalendarView:
    """Everything needed to draw one render pass."""

    window: DayWindow
    events: list[LayoutEvent]
    grid: GridLayout
    stats: CalendarStats
    warnings: list[RecordProblem]
    error: str | None


def describe_error(error: Exception) -> str:
    """Turn a fetch failure into a message fit for display."""
    if isinstance(error, (asyncio.TimeoutError, httpx.TimeoutException)):
        return TIMEOUT_ERROR
    if isinstance(error, ApiError):
        return str(error) or DEFAULT_LOAD_ERROR
    if isinstance(error, httpx.HTTPError):
        return f"{DEFAULT_LOAD_ERROR}: {error}" if str(error) else DEFAULT_LOAD_ERROR
    return DEFAULT_LOAD_ERROR


class CalendarLoader:
    def __init__(
        self,
        fetch: FetchAppointments,
        window: DayWindow | None = None,
        status: str | None = None,
        client_id: str | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        limit: int = CALENDAR_FETCH_LIMIT,
    ):
        self._fetch = fetch
        self._timeout = timeout
        self._limit = limit
        self._request_seq = 0
        self.state = CalendarState(
            window=window or DayWindow.current(), status=status or None, client_id=client_id or None
        )

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def next(self):
        self.state.window = self.state.window.next()

    def prev(self):
        self.state.window = self.state.window.prev()

    def go_today(self, today: date | None = None):
        self.state.window = self.state.window.today(today)

    def set_status(self, status: str | None):
        self.state.status = status or None

    def build_query(self) -> AppointmentQuery:
        query: AppointmentQuery = {"page": 1, "limit": self._limit}
        if self.state.status:
            query["status"] = self.state.status
        if self.state.client_id:
            query["clientId"] = self.state.client_id
        return query

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load(self) -> CalendarState:
        """
        Fetch records for the current parameters.

        Every failure ends as an error message with an empty record list. A
        response that arrives after a newer load() has started is dropped.
        """
        self._request_seq += 1
        request_id = self._request_seq
        self.state.loading = True
        self.state.error = None

        try:
            response = await asyncio.wait_for(self._fetch(self.build_query()), timeout=self._timeout)
        except Exception as e:
            if request_id == self._request_seq:
                self.state.records = []
                self.state.error = describe_error(e)
                self.state.loading = False
            return self.state

        if request_id == self._request_seq:
            items = response.get("items") if isinstance(response, dict) else None
            self.state.records = list(items) if isinstance(items, list) else []
            self.state.loading = False
        return self.state

    def view(self, today: date | None = None) -> CalendarView:
        """Compute events, grid and stats from the current state."""
        state = self.state
        events = map_events(state.records, status=state.status)
        grid = build_grid(state.window.days, events, hours=hour_range(), today=today)
        stats = compute_stats(events, state.window.anchor, today=today)

        return CalendarView(
            window=state.window,
            events=events,
            grid=grid,
            stats=stats,
            warnings=validate_records(state.records),
            error=state.error,
        )
