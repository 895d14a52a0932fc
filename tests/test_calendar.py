from datetime import date, datetime

from oncall.domain.models import PRIMARY, SECONDARY, Person
from oncall.io.calendar import (
    PRIMARY_COLORS,
    SECONDARY_COLORS,
    WEEKEND_BORDER,
    build_calendar_events,
    format_clock,
    shifts_by_week,
)
from oncall.services.slots import make_slot

ALICE = Person("Alice", "alice@example.com", 1)
BOB = Person("Bob", "bob@example.com", 2)


def _schedule():
    slots = [
        make_slot(date(2025, 1, 8), PRIMARY, 0),
        make_slot(date(2025, 1, 8), SECONDARY, 0),
        make_slot(date(2025, 1, 10), PRIMARY, 1),
        make_slot(date(2025, 1, 12), SECONDARY, 0),
    ]
    slots[0].assigned_person = ALICE
    slots[1].assigned_person = BOB
    slots[2].assigned_person = BOB
    return slots


def test_event_times_and_titles():
    events = build_calendar_events(_schedule())
    assert len(events) == 4

    wed = events[0]
    assert wed.event_id == "2025-01-08-primary-a"
    assert wed.title == "Alice (PA)"
    assert wed.start == datetime(2025, 1, 8, 20, 0)
    assert wed.end == datetime(2025, 1, 9, 8, 0)
    assert wed.background_color == PRIMARY_COLORS[0]
    assert wed.border_width == 1

    fri = events[2]
    assert fri.title == "Bob (PB)"
    assert fri.end == datetime(2025, 1, 11, 20, 0)
    assert fri.background_color == PRIMARY_COLORS[1]
    assert fri.border_color == WEEKEND_BORDER
    assert fri.border_width == 3
    assert fri.extended_props["isWeekend"] is True

    assert events[1].background_color == SECONDARY_COLORS[0]
    assert events[3].title == "UNASSIGNED (SA)"


def test_event_filters():
    by_person = build_calendar_events(_schedule(), filter_person="bob@example.com")
    assert [e.event_id for e in by_person] == ["2025-01-08-secondary-a", "2025-01-10-primary-b"]

    by_role = build_calendar_events(_schedule(), filter_role=SECONDARY)
    assert [e.event_id for e in by_role] == ["2025-01-08-secondary-a", "2025-01-12-secondary-a"]


def test_custom_shift_start():
    events = build_calendar_events(_schedule(), shift_start="19:30")
    assert events[0].start == datetime(2025, 1, 8, 19, 30)


def test_shifts_grouped_by_sunday():
    weeks = shifts_by_week(_schedule())

    # Wed 8th and Fri 10th fall in the week starting Sunday 5th; the
    # unassigned Sunday 12th slot is left out
    assert list(weeks) == ["2025-01-05"]
    entries = weeks["2025-01-05"]
    assert [e["date"] for e in entries] == ["2025-01-08", "2025-01-08", "2025-01-10"]
    assert entries[2]["day_name"] == "Friday"
    assert entries[2]["start_time"] == "8:00 PM"
    assert entries[2]["end_time"] == "8:00 PM"
    assert entries[1]["end_time"] == "8:00 AM"
    assert entries[0]["person"] == ALICE


def test_format_clock():
    assert format_clock(datetime(2025, 1, 8, 20, 0)) == "8:00 PM"
    assert format_clock(datetime(2025, 1, 8, 12, 30)) == "12:30 PM"
