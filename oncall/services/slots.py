"""Expansion of a date range into unfilled duty slots."""

from __future__ import annotations

from datetime import date
from typing import List

from oncall.domain.models import PRIMARY, SECONDARY, DutySlot
from oncall.services.dates import generate_dates, is_weekend_night, normalize_date, slot_label


def slot_duration(role: str, is_weekend: bool) -> int:
    """Weekend primary duty runs 24 hours; everything else is a 12 hour night."""
    return 24 if role == PRIMARY and is_weekend else 12


def make_slot(day: date, role: str, index: int) -> DutySlot:
    date_str = normalize_date(day)
    label = slot_label(index)
    weekend = is_weekend_night(day)
    return DutySlot(
        slot_id=f"{date_str}-{role}-{label}",
        date=day,
        date_str=date_str,
        role=role,
        slot_label=label,
        slot_index=index,
        is_weekend=weekend,
        duration=slot_duration(role, weekend),
    )


def generate_slots(
    start: date | None,
    end: date | None,
    primary_count: int,
    secondary_count: int,
) -> List[DutySlot]:
    """
    Build every slot in the inclusive range, day by day.

    Each day yields its primary slots (a, b, c...) followed by its
    secondary slots. An unset or inverted range yields no slots.
    """
    slots: List[DutySlot] = []
    for day in generate_dates(start, end):
        for i in range(primary_count):
            slots.append(make_slot(day, PRIMARY, i))
        for i in range(secondary_count):
            slots.append(make_slot(day, SECONDARY, i))
    return slots


def processing_priority(slot: DutySlot) -> int:
    return (10 if slot.is_weekend else 0) + (5 if slot.role == PRIMARY else 0)


def sort_for_assignment(slots: List[DutySlot]) -> List[DutySlot]:
    """Day order; within a day the hardest slots (weekend, primary) come first."""
    return sorted(slots, key=lambda s: (s.date, -processing_priority(s)))
