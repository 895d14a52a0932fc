"""Projection of a schedule into calendar events and weekly groupings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

from oncall.domain.models import PRIMARY, UNASSIGNED, DutySlot
from oncall.services.dates import day_name, normalize_date, week_start

PRIMARY_COLORS = [
    "#1e40af", "#3b82f6", "#6366f1", "#8b5cf6", "#a855f7",
    "#c084fc", "#d8b4fe", "#7c3aed", "#4f46e5", "#4338ca",
]
SECONDARY_COLORS = [
    "#166534", "#22c55e", "#10b981", "#14b8a6", "#06b6d4",
    "#0891b2", "#0e7490", "#155e75", "#059669", "#047857",
]
WEEKEND_BORDER = "#fbbf24"


@dataclass
class CalendarEvent:
    event_id: str
    title: str
    start: datetime
    end: datetime
    background_color: str
    border_color: str
    border_width: int
    extended_props: Dict[str, Any] = field(default_factory=dict)


def parse_time_string(hm: str) -> time:
    """Parse an ``HH:MM`` string."""
    hour, minute = [int(x) for x in hm.split(":")]
    return time(hour, minute)


def format_clock(dt: datetime) -> str:
    # "8:00 PM"
    return dt.strftime("%I:%M %p").lstrip("0")


def slot_times(slot: DutySlot, shift_start: str = "20:00") -> tuple[datetime, datetime]:
    """Start at the configured evening time; end after the slot's duration."""
    start = datetime.combine(slot.date, parse_time_string(shift_start))
    return start, start + timedelta(hours=slot.duration)


def slot_color(slot: DutySlot) -> str:
    palette = PRIMARY_COLORS if slot.role == PRIMARY else SECONDARY_COLORS
    return palette[slot.slot_index % len(palette)]


def build_calendar_events(
    schedule: List[DutySlot],
    filter_person: Optional[str] = None,
    filter_role: Optional[str] = None,
    shift_start: str = "20:00",
) -> List[CalendarEvent]:
    """
    Turn scheduled slots into display events.

    Args:
        schedule: Slots to project
        filter_person: Only slots held by this email
        filter_role: Only slots of this role
        shift_start: Clock time every shift begins

    Returns:
        List of CalendarEvent in schedule order
    """
    events = []
    for slot in schedule:
        person = slot.assigned_person
        if filter_person and (person is None or person.email != filter_person):
            continue
        if filter_role and slot.role != filter_role:
            continue

        start, end = slot_times(slot, shift_start)
        color = slot_color(slot)
        holder = person.name if person else UNASSIGNED
        events.append(
            CalendarEvent(
                event_id=slot.slot_id,
                title=f"{holder} ({slot.short_code})",
                start=start,
                end=end,
                background_color=color,
                border_color=WEEKEND_BORDER if slot.is_weekend else color,
                border_width=3 if slot.is_weekend else 1,
                extended_props={
                    "role": slot.role,
                    "slot": slot.slot_label,
                    "slotIndex": slot.slot_index,
                    "isWeekend": slot.is_weekend,
                    "duration": slot.duration,
                    "person": person,
                    "warning": slot.warning,
                },
            )
        )
    return events


def shifts_by_week(schedule: List[DutySlot], shift_start: str = "20:00") -> Dict[str, List[Dict[str, Any]]]:
    """Assigned slots grouped under the Sunday that starts their week."""
    weeks: Dict[str, List[Dict[str, Any]]] = {}
    for slot in schedule:
        if slot.assigned_person is None:
            continue
        start, end = slot_times(slot, shift_start)
        key = normalize_date(week_start(slot.date))
        weeks.setdefault(key, []).append(
            {
                "date": slot.date_str,
                "day_name": day_name(slot.date),
                "role": slot.role,
                "slot": slot.slot_label,
                "is_weekend": slot.is_weekend,
                "start_time": format_clock(start),
                "end_time": format_clock(end),
                "duration": slot.duration,
                "person": slot.assigned_person,
            }
        )
    return weeks
