"""
Tests for the date window and the record-to-event mapper.
"""

from datetime import date, datetime, timedelta

import pytest

from core.config import CATEGORY_COLORS, DEFAULT_EVENT_COLOR
from services.calendar import DayWindow, map_events, map_record, resolve_color


class TestDayWindow:
    def test_days_start_at_anchor(self):
        window = DayWindow(date(2024, 1, 1))
        assert window.days == [date(2024, 1, d) for d in range(1, 8)]

    @pytest.mark.parametrize("anchor", [date(2024, 1, 1), date(2023, 12, 29), date(2024, 2, 26)])
    @pytest.mark.parametrize("span", [1, 3, 7, 14])
    def test_days_are_consecutive(self, anchor, span):
        window = DayWindow(anchor, span)
        days = window.days
        assert len(days) == span
        assert days[0] == anchor
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    def test_anchor_is_normalized_to_midnight(self):
        window = DayWindow(datetime(2024, 1, 1, 17, 45))
        assert window.anchor == date(2024, 1, 1)
        assert not isinstance(window.anchor, datetime)

    def test_next_moves_by_span(self):
        assert DayWindow(date(2024, 1, 1)).next().anchor == date(2024, 1, 8)

    def test_rollover_across_year(self):
        window = DayWindow(date(2023, 12, 28))
        assert window.days[-1] == date(2024, 1, 3)
        assert window.next().anchor == date(2024, 1, 4)

    def test_leap_day(self):
        assert DayWindow(date(2024, 2, 26), 7).days[3] == date(2024, 2, 29)

    def test_next_then_prev_restores_anchor(self):
        window = DayWindow(date(2024, 3, 30))
        assert window.next().prev() == window
        assert window.prev().next() == window

    def test_navigation_returns_new_window(self):
        window = DayWindow(date(2024, 1, 1))
        moved = window.next()
        assert moved is not window
        assert window.anchor == date(2024, 1, 1)

    def test_today_resets_anchor(self):
        window = DayWindow(date(2020, 5, 5), 7)
        assert window.today(date(2024, 6, 1)) == DayWindow(date(2024, 6, 1), 7)

    def test_current_defaults_to_today(self):
        assert DayWindow.current().anchor == date.today()


class TestMapRecord:
    def test_start_and_end_combined_with_date(self, sample_record):
        event = map_record(sample_record)
        assert event.start == datetime(2024, 1, 3, 9, 0)
        assert event.end == datetime(2024, 1, 3, 10, 30)
        assert event.duration_hours == 1.5

    def test_missing_end_time_becomes_one_hour(self, sample_record):
        record = {**sample_record, "startTime": "14:00"}
        del record["endTime"]
        event = map_record(record)
        assert event.end == datetime(2024, 1, 3, 15, 0)
        assert event.duration_hours == 1

    def test_title_uses_client_name(self, sample_record):
        assert map_record(sample_record).title == "Maria Souza"

    def test_title_falls_back_to_client_id(self, sample_record):
        record = {**sample_record, "client": {"id": "client-1"}}
        assert map_record(record).title == "client-1"
        record = {**sample_record, "client": None}
        assert map_record(record).title == "client-1"

    def test_color_from_category(self, sample_record):
        assert map_record(sample_record).color == CATEGORY_COLORS["CONSULTATION"]

    def test_unknown_category_gets_default_color(self, sample_record):
        assert map_record({**sample_record, "appointmentType": "SPA"}).color == DEFAULT_EVENT_COLOR
        record = dict(sample_record)
        del record["appointmentType"]
        assert map_record(record).color == DEFAULT_EVENT_COLOR
        assert resolve_color(None) == DEFAULT_EVENT_COLOR

    def test_malformed_start_time_is_skipped(self, sample_record):
        assert map_record({**sample_record, "startTime": "ab:cd"}) is None

    def test_malformed_date_is_skipped(self, sample_record):
        assert map_record({**sample_record, "scheduledDate": "not-a-date"}) is None

    def test_non_string_client_falls_back_to_client_id(self, sample_record):
        assert map_record({**sample_record, "client": "Maria"}).title == "client-1"
        record = {**sample_record, "client": {"name": 42}}
        assert map_record(record).title == "client-1"

    def test_non_string_status_and_category_read_as_empty(self, sample_record):
        event = map_record({**sample_record, "status": 1, "appointmentType": ["CONSULTATION"]})
        assert event.status == ""
        assert event.category == ""
        assert event.color == DEFAULT_EVENT_COLOR

    def test_non_string_start_time_is_skipped(self, sample_record):
        assert map_record({**sample_record, "startTime": 900}) is None

    def test_iso_timestamp_date_accepted(self, sample_record):
        event = map_record({**sample_record, "scheduledDate": "2024-01-03T00:00:00.000Z"})
        assert event.start == datetime(2024, 1, 3, 9, 0)


class TestMapEvents:
    def test_source_order_kept(self, sample_records):
        events = map_events(sample_records)
        assert [e.id for e in events] == ["appt-1", "appt-2", "appt-3", "appt-4"]

    def test_status_filter_is_exact(self, sample_records):
        events = map_events(sample_records, status="CONFIRMED")
        assert [e.id for e in events] == ["appt-1", "appt-3"]

    def test_non_object_entries_skipped(self, sample_record):
        events = map_events([sample_record, "appt-2", None, 7])
        assert [e.id for e in events] == ["appt-1"]

    def test_filtered_set_is_subset(self, generated_records):
        everything = {e.id for e in map_events(generated_records)}
        for status in {r["status"] for r in generated_records}:
            filtered = map_events(generated_records, status=status)
            expected = {r["id"] for r in generated_records if r["status"] == status}
            assert {e.id for e in filtered} == expected
            assert expected <= everything

    def test_confirmed_scenario(self, week_anchor, sample_record):
        records = []
        for i in range(10):
            records.append(
                {
                    **sample_record,
                    "id": f"a{i}",
                    "scheduledDate": (week_anchor + timedelta(days=i % 7)).isoformat(),
                    "status": "CONFIRMED" if i < 4 else "SCHEDULED",
                }
            )
        assert len(map_events(records)) == 10
        assert len(map_events(records, status="CONFIRMED")) == 4

    def test_day_restriction(self, sample_records, week_anchor):
        events = map_events(sample_records, days=DayWindow(week_anchor).days)
        assert [e.id for e in events] == ["appt-1", "appt-2", "appt-3"]

    def test_end_always_after_start(self, generated_records):
        for event in map_events(generated_records):
            assert event.end > event.start
