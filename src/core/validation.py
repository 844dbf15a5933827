"""
Appointment record validation.

The clinic API does not guarantee well-formed dates and times, so every
record goes through these parsers before it reaches the calendar grid.
"""

from datetime import date, datetime, time, timedelta

from models.appointments import AppointmentRecord, RecordProblem


def parse_calendar_date(value: str | None) -> date | None:
    """Parse 'YYYY-MM-DD' (or the date part of an ISO timestamp)."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    # anything after the date must be a time part
    if len(value) > 10 and value[10] not in "T ":
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_time_of_day(value: str | None) -> time | None:
    """Parse 'HH:MM' (seconds, if present, are ignored)."""
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hour = int(parts[0])
        minute = int(parts[1])
    except ValueError:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return time(hour, minute)


def resolve_interval(record: AppointmentRecord) -> tuple[datetime, datetime] | None:
    """
    Combine a record's date and times into (start, end) instants.

    Returns None when the date or start time cannot be parsed. A missing end
    time, or one that is not after the start, becomes start + 1 hour.
    """
    day = parse_calendar_date(record.get("scheduledDate"))
    start_time = parse_time_of_day(record.get("startTime"))
    if day is None or start_time is None:
        return None

    start = datetime.combine(day, start_time)
    end_time = parse_time_of_day(record.get("endTime"))
    end = datetime.combine(day, end_time) if end_time else None
    if end is None or end <= start:
        end = start + timedelta(hours=1)
    return start, end


def validate_records(records: list[AppointmentRecord]) -> list[RecordProblem]:
    """
    Check records for data-quality problems.

    Checks:
    1. scheduledDate is a valid date
    2. startTime is a valid HH:MM time
    3. endTime, when present, is a valid time after startTime

    Entries that are not objects at all are reported as "item <index>".
    """
    problems: list[RecordProblem] = []

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            problems.append({"id": f"item {index}", "message": "Record is not an object"})
            continue

        record_id = str(record.get("id", ""))
        errors = []

        if parse_calendar_date(record.get("scheduledDate")) is None:
            errors.append(f"Invalid scheduledDate '{record.get('scheduledDate')}'")

        start_time = parse_time_of_day(record.get("startTime"))
        if start_time is None:
            errors.append(f"Invalid startTime '{record.get('startTime')}'")

        end_raw = record.get("endTime")
        if end_raw:
            end_time = parse_time_of_day(end_raw)
            if end_time is None:
                errors.append(f"Invalid endTime '{end_raw}', using one hour")
            elif start_time is not None and end_time <= start_time:
                errors.append(f"endTime '{end_raw}' is not after startTime, using one hour")

        if errors:
            problems.append({"id": record_id, "message": "; ".join(errors)})

    return problems
