#!/usr/bin/env python3
"""
Export one week of clinic appointments to an Excel agenda.

Fetches appointments from the clinic API, lays them out on the hour x day
grid and writes the agenda workbook.

Usage:
    uv run python src/scripts/create_weekly_agenda.py --date 2024-01-01 --status CONFIRMED
"""

import argparse
import asyncio
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.api_client import ApiClient, SessionContext
from core.config import OUTPUT_DIR
from services.appointments import fetch_appointments
from services.calendar import DayWindow
from services.loader import CalendarLoader
from services.reports import agenda_filename, create_agenda_workbook, save_workbook


def parse_anchor_date(date_str: str | None) -> date:
    """First day of the agenda; today when not given."""
    if date_str:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    return date.today()


async def main(date_str: str | None = None, status: str | None = None, output_dir: Path | None = None):
    """Main entry point."""
    window = DayWindow(parse_anchor_date(date_str))
    print(f"Building agenda for {window.anchor} to {window.last_day}")

    client = ApiClient(SessionContext.from_config())

    async def fetch(query):
        return await fetch_appointments(client, query)

    loader = CalendarLoader(fetch, window=window, status=status)
    await loader.load()
    view = loader.view()

    if view.error:
        print(f"\nError: {view.error}")
        sys.exit(1)

    print(f"Appointments fetched: {len(loader.state.records)}")
    print(f"Placed on the grid: {view.grid.block_count}")
    for warning in view.warnings:
        print(f"  Skipped/adjusted {warning['id']}: {warning['message']}")

    wb = create_agenda_workbook(view.window.days, view.grid.hours, view.events, view.stats)
    output_dir = output_dir or OUTPUT_DIR / "agendas"
    output_path = output_dir / agenda_filename(window.anchor)
    save_workbook(wb, output_path)

    print("\nDone!")
    return output_path


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export a weekly appointment agenda")
    parser.add_argument(
        "--date",
        help="First day of the week (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--status",
        help="Only include appointments with this exact status (e.g. CONFIRMED).",
    )
    args = parser.parse_args()

    asyncio.run(main(args.date, args.status))
