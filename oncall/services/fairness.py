"""Fairness report over a finished schedule."""

from __future__ import annotations

import math
from datetime import date
from typing import Dict, List

from oncall.domain.models import (
    SHIFT_CATEGORIES,
    DutySlot,
    FairnessReport,
    Person,
    PersonReport,
    PreferenceSet,
)
from oncall.services.dates import is_weekend_night
from oncall.services.load import LoadTracker


def load_variance(loads: LoadTracker) -> float:
    """Mean squared deviation from the category averages over every (person, category) pair."""
    n = len(loads.records)
    if n == 0:
        return 0.0
    avg = loads.average()
    total = 0.0
    for rec in loads.records.values():
        for c in SHIFT_CATEGORIES:
            total += (rec.count(c) - avg[c]) ** 2
    return total / (n * len(SHIFT_CATEGORIES))


def fairness_score(variance: float) -> int:
    """100 for a perfectly even spread, falling by 10 per unit of variance, floored at 0."""
    # half-up rounding
    return max(0, int(math.floor(100 - variance * 10 + 0.5)))


def generate_fairness_report(
    people: List[Person],
    preferences: Dict[str, PreferenceSet],
    schedule: List[DutySlot],
    loads: LoadTracker,
    dates: List[date],
) -> FairnessReport:
    """
    Summarize loads and preference satisfaction per person.

    Args:
        people: Roster in display order
        preferences: email -> PreferenceSet
        schedule: Final slots
        loads: Load records matching ``schedule``
        dates: Days covered by the run

    Returns:
        FairnessReport
    """
    slots_by_email: Dict[str, List[DutySlot]] = {}
    for slot in schedule:
        if slot.assigned_person is not None:
            slots_by_email.setdefault(slot.assigned_person.email, []).append(slot)

    by_person: List[PersonReport] = []
    for person in people:
        rec = loads[person.email]
        prefs = preferences.get(person.email) or PreferenceSet()
        assigned = slots_by_email.get(person.email, [])

        tally = {"preferred": 0, "neutral": 0, "not_preferred": 0}
        for slot in assigned:
            if slot.date_str in prefs.preferred:
                tally["preferred"] += 1
            elif slot.date_str in prefs.not_preferred:
                tally["not_preferred"] += 1
            else:
                tally["neutral"] += 1

        by_person.append(
            PersonReport(
                name=person.name,
                email=person.email,
                weekday_primary=rec.weekday_primary,
                weekend_primary=rec.weekend_primary,
                weekday_secondary=rec.weekday_secondary,
                weekend_secondary=rec.weekend_secondary,
                total_hours=rec.total_hours,
                total_shifts=len(assigned),
                preferred_assignments=tally["preferred"],
                indifferent_assignments=tally["neutral"],
                not_preferred_assignments=tally["not_preferred"],
            )
        )

    summary = {
        "total_shifts": len(schedule),
        "total_days": len(dates),
        "weekend_days": sum(1 for d in dates if is_weekend_night(d)),
    }

    return FairnessReport(
        by_person=by_person,
        summary=summary,
        average_load=loads.average(),
        fairness_score=fairness_score(load_variance(loads)),
    )
