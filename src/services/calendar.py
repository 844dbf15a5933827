"""
Calendar date window and appointment-to-event mapping.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from core.config import CATEGORY_COLORS, DAY_SPAN, DEFAULT_EVENT_COLOR
from core.validation import resolve_interval
from models.appointments import AppointmentRecord, LayoutEvent


# =============================================================================
# DATE WINDOW
# =============================================================================


def normalize_day(value: date | datetime) -> date:
    """Strip any time component."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DayWindow:
    """
    Fixed-length run of consecutive days starting at the anchor.

    Navigation never mutates a window, it returns a new one. Arithmetic is
    plain wall-clock date arithmetic; DST transitions are not special-cased.
    """

    anchor: date
    span: int = DAY_SPAN

    def __post_init__(self):
        object.__setattr__(self, "anchor", normalize_day(self.anchor))

    @classmethod
    def current(cls, span: int = DAY_SPAN, today: date | None = None) -> "DayWindow":
        return cls(anchor=today or date.today(), span=span)

    @property
    def days(self) -> list[date]:
        return [self.anchor + timedelta(days=offset) for offset in range(self.span)]

    @property
    def last_day(self) -> date:
        return self.anchor + timedelta(days=self.span - 1)

    def next(self) -> "DayWindow":
        return DayWindow(self.anchor + timedelta(days=self.span), self.span)

    def prev(self) -> "DayWindow":
        return DayWindow(self.anchor - timedelta(days=self.span), self.span)

    def today(self, today: date | None = None) -> "DayWindow":
        return DayWindow(today or date.today(), self.span)


# =============================================================================
# EVENT MAPPING
# =============================================================================


def text_field(record: AppointmentRecord, key: str) -> str:
    """String value of a record field; anything else reads as empty."""
    value = record.get(key)
    return value if isinstance(value, str) else ""


def resolve_color(category: str | None) -> str:
    """Display color for an appointment type; unknown types get the default."""
    if not isinstance(category, str):
        return DEFAULT_EVENT_COLOR
    return CATEGORY_COLORS.get(category, DEFAULT_EVENT_COLOR)


def event_title(record: AppointmentRecord) -> str:
    """Client name, falling back to the client id."""
    client = record.get("client")
    name = client.get("name") if isinstance(client, dict) else None
    if isinstance(name, str) and name:
        return name
    client_id = record.get("clientId")
    return str(client_id) if client_id else ""


def map_record(record: AppointmentRecord) -> LayoutEvent | None:
    """Build a LayoutEvent, or None when the record's date/time is unusable."""
    interval = resolve_interval(record)
    if interval is None:
        return None
    start, end = interval

    return LayoutEvent(
        id=str(record.get("id", "")),
        title=event_title(record),
        start=start,
        end=end,
        color=resolve_color(record.get("appointmentType")),
        status=text_field(record, "status"),
        category=text_field(record, "appointmentType"),
    )


def map_events(
    records: list[AppointmentRecord],
    status: str | None = None,
    days: list[date] | None = None,
) -> list[LayoutEvent]:
    """
    Turn raw records into layout events.

    Records are kept in source order. When a status filter is given only
    exact (case-sensitive) matches survive; when days are given only events
    starting on one of those days survive. Records with malformed dates or
    times, and entries that are not objects, are skipped (validate_records
    reports them).
    """
    keep_days = set(days) if days is not None else None
    events = []

    for record in records:
        if not isinstance(record, dict):
            continue
        if status and record.get("status") != status:
            continue

        event = map_record(record)
        if event is None:
            continue
        if keep_days is not None and event.start.date() not in keep_days:
            continue

        events.append(event)

    return events
