"""
Weekly agenda export to Excel.
"""

from datetime import date
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from core.config import (
    AGENDA_SHEET_NAME,
    DETAIL_HEADERS,
    DETAIL_SHEET_NAME,
    STATUS_LABELS,
    SUMMARY_ROW_LABELS,
    SUMMARY_SHEET_NAME,
    TYPE_LABELS,
    WEEKDAY_LABELS,
)
from models.appointments import LayoutEvent
from services.layout import CalendarStats


def format_date_display(d: date) -> str:
    """Format date as DD/MM/YYYY (pt-BR)."""
    return f"{d.day:02d}/{d.month:02d}/{d.year}"


def format_day_header(d: date) -> str:
    """Column header, e.g. 'Seg 01/01'."""
    return f"{WEEKDAY_LABELS[d.weekday()]} {d.day:02d}/{d.month:02d}"


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def type_label(category: str) -> str:
    return TYPE_LABELS.get(category, category)


def agenda_row_for(event: LayoutEvent, hours: list[int]) -> int:
    """
    Index into hours for the row an event is listed in.

    Mirrors the grid: events before the first hour pin to the first row,
    events after the last hour go to the last row.
    """
    index = event.start.hour - hours[0]
    return min(max(index, 0), len(hours) - 1)


def write_agenda_sheet(ws, days: list[date], hours: list[int], events: list[LayoutEvent]):
    """
    Write the hour x day agenda grid.

    Row 1: Hora | day headers
    Rows 2..: one row per hour, cells list "HH:MM Title" for events starting there
    """
    ws.cell(row=1, column=1, value="Hora").font = Font(bold=True)
    for col_idx, day in enumerate(days, start=2):
        cell = ws.cell(row=1, column=col_idx, value=format_day_header(day))
        cell.font = Font(bold=True)
        ws.column_dimensions[get_column_letter(col_idx)].width = 24

    for row_offset, hour in enumerate(hours):
        ws.cell(row=row_offset + 2, column=1, value=f"{hour:02d}:00")

    cells: dict[tuple[int, int], list[LayoutEvent]] = {}
    for event in events:
        day = event.start.date()
        if day not in days:
            continue
        key = (agenda_row_for(event, hours) + 2, days.index(day) + 2)
        cells.setdefault(key, []).append(event)

    for (row_idx, col_idx), cell_events in cells.items():
        lines = [f"{e.start:%H:%M} {e.title}" for e in cell_events]
        cell = ws.cell(row=row_idx, column=col_idx, value="\n".join(lines))
        cell.alignment = Alignment(wrap_text=True, vertical="top")
        # First event's color wins when several share a cell
        color = cell_events[0].color.lstrip("#").upper()
        cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")


def write_detail_sheet(ws, events: list[LayoutEvent]):
    """Write one row per event, in event order."""
    for col_idx, header in enumerate(DETAIL_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for row_idx, event in enumerate(events, start=2):
        row_data = [
            format_date_display(event.start.date()),
            f"{event.start:%H:%M}",
            f"{event.end:%H:%M}",
            event.title,
            status_label(event.status),
            type_label(event.category),
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)


def write_summary_sheet(ws, stats: CalendarStats, first_day: date, last_day: date):
    ws.cell(row=1, column=1, value="Período").font = Font(bold=True)
    ws.cell(
        row=1,
        column=2,
        value=f"{format_date_display(first_day)} - {format_date_display(last_day)}",
    )
    values = [stats.today, stats.week, stats.total, stats.confirmed]
    for row_idx, (label, value) in enumerate(zip(SUMMARY_ROW_LABELS, values), start=2):
        ws.cell(row=row_idx, column=1, value=label)
        ws.cell(row=row_idx, column=2, value=value)


def create_agenda_workbook(
    days: list[date],
    hours: list[int],
    events: list[LayoutEvent],
    stats: CalendarStats,
) -> Workbook:
    """
    Build the weekly agenda workbook.

    Sheet 1: "Agenda" - hour rows x day columns
    Sheet 2: "Detalhes" - one row per event
    Sheet 3: "Resumo" - summary counts
    """
    wb = Workbook()

    ws_agenda = wb.active
    ws_agenda.title = AGENDA_SHEET_NAME
    write_agenda_sheet(ws_agenda, days, hours, events)

    ws_detail = wb.create_sheet(title=DETAIL_SHEET_NAME)
    write_detail_sheet(ws_detail, [e for e in events if e.start.date() in days])

    ws_summary = wb.create_sheet(title=SUMMARY_SHEET_NAME)
    write_summary_sheet(ws_summary, stats, days[0], days[-1])

    return wb


def agenda_filename(first_day: date) -> str:
    return f"agenda_{first_day:%Y_%m_%d}.xlsx"


def workbook_to_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def save_workbook(wb: Workbook, output_path: Path):
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved agenda to: {output_path}")
