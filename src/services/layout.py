"""
Time-grid layout and summary counts for the appointment calendar.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from core.config import GRID_END_HOUR, GRID_START_HOUR, MIN_BLOCK_HEIGHT, ROW_HEIGHT
from models.appointments import LayoutEvent


# =============================================================================
# GRID
# =============================================================================


@dataclass(frozen=True)
class EventBlock:
    """Event positioned inside its day column (pixels from the grid top)."""

    event: LayoutEvent
    top: float
    height: float


@dataclass(frozen=True)
class DayColumn:
    day: date
    is_today: bool
    blocks: list[EventBlock] = field(default_factory=list)


@dataclass(frozen=True)
class GridLayout:
    hours: list[int]
    row_height: int
    total_height: int
    columns: list[DayColumn]

    @property
    def block_count(self) -> int:
        return sum(len(column.blocks) for column in self.columns)


def hour_range(start: int = GRID_START_HOUR, end: int = GRID_END_HOUR) -> list[int]:
    """Grid rows, both ends inclusive."""
    return list(range(start, end + 1))


def is_same_day(a: date | datetime, b: date | datetime) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def position_event(
    event: LayoutEvent,
    first_hour: int,
    row_height: int,
    total_height: int,
    min_block_height: int = MIN_BLOCK_HEIGHT,
) -> tuple[float, float]:
    """
    Return (top, height) for an event block.

    Events starting before the first grid hour are pinned to the top. The
    bottom edge is not clamped, so late events may overflow the grid.
    """
    top = (event.start.hour - first_hour) * row_height
    top = min(max(top, 0), total_height)
    height = max(min_block_height, event.duration_hours * row_height)
    return top, height


def build_grid(
    days: list[date],
    events: list[LayoutEvent],
    hours: list[int] | None = None,
    today: date | None = None,
    row_height: int = ROW_HEIGHT,
    min_block_height: int = MIN_BLOCK_HEIGHT,
) -> GridLayout:
    """
    Lay events out in one column per day.

    Overlapping events are not split into sub-columns; their blocks simply
    overlap. "Today" is evaluated on every call.
    """
    hours = hours if hours is not None else hour_range()
    today = today or date.today()
    total_height = len(hours) * row_height
    first_hour = hours[0] if hours else 0

    columns = []
    for day in days:
        blocks = []
        for event in events:
            if not is_same_day(event.start, day):
                continue
            top, height = position_event(
                event, first_hour, row_height, total_height, min_block_height
            )
            blocks.append(EventBlock(event=event, top=top, height=height))
        columns.append(DayColumn(day=day, is_today=is_same_day(day, today), blocks=blocks))

    return GridLayout(hours=hours, row_height=row_height, total_height=total_height, columns=columns)


# =============================================================================
# STATS
# =============================================================================


@dataclass(frozen=True)
class CalendarStats:
    today: int
    week: int
    total: int
    confirmed: int = 0  # Placeholder, not derived from event status


def compute_stats(events: list[LayoutEvent], anchor: date, today: date | None = None) -> CalendarStats:
    """
    Count events for the summary cards.

    The week range is [anchor midnight, anchor midnight + 6 days], both ends
    inclusive.
    """
    today = today or date.today()
    week_start = datetime.combine(anchor, time.min)
    week_end = week_start + timedelta(days=6)

    today_count = sum(1 for e in events if is_same_day(e.start, today))
    week_count = sum(1 for e in events if week_start <= e.start <= week_end)

    return CalendarStats(today=today_count, week=week_count, total=len(events))
