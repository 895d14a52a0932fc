from __future__ import annotations

from collections import Counter
from typing import Dict, List

import pandas as pd

from .domain.models import PRIMARY, SHIFT_CATEGORIES, DutySlot, Person
from .services.dates import is_weekend_night


def validate_schedule(schedule: List[DutySlot], people: List[Person]) -> None:
    # Every slot filled by someone on the roster
    emails = {p.email for p in people}
    for slot in schedule:
        if slot.assigned_person is None:
            raise ValueError(f"Slot {slot.slot_id} is unassigned")
        if slot.assigned_person.email not in emails:
            raise ValueError(f"Slot {slot.slot_id} references unknown person {slot.assigned_person.email}")

    # No one works twice on the same day
    per_day = Counter((s.assigned_person.email, s.date_str) for s in schedule)
    doubled = [key for key, n in per_day.items() if n > 1]
    if doubled:
        email, day = doubled[0]
        raise ValueError(f"Double booking detected: {email} on {day}")

    # Weekend and duration rules
    for slot in schedule:
        if slot.is_weekend != is_weekend_night(slot.date):
            raise ValueError(f"Slot {slot.slot_id} has the wrong weekend flag")
        expected = 24 if slot.role == PRIMARY and slot.is_weekend else 12
        if slot.duration != expected:
            raise ValueError(f"Slot {slot.slot_id} lasts {slot.duration}h, expected {expected}h")

    # Spread of at most one per category
    counts: Dict[str, Counter] = {c: Counter({e: 0 for e in emails}) for c in SHIFT_CATEGORIES}
    totals = Counter()
    for slot in schedule:
        counts[slot.category][slot.assigned_person.email] += 1
        totals[slot.category] += 1
    for category in SHIFT_CATEGORIES:
        if totals[category] == 0 or not emails:
            continue
        values = counts[category].values()
        spread = max(values) - min(values)
        if spread > 1:
            raise ValueError(f"Unfair spread in {category}: max - min = {spread}")


def summarize_schedule(schedule_df: pd.DataFrame) -> str:
    """Render an exported schedule CSV as per-category and per-person tables."""
    if schedule_df.empty:
        return "No assignments."
    df = schedule_df.copy()
    df["Category"] = (
        df["Weekend"].map({"Yes": "weekend", "No": "weekday"}) + "_" + df["Role"].astype(str)
    )

    coverage = df.groupby(["Date", "Role"]).size().unstack(fill_value=0)
    per_person = (
        df.groupby(["Person Name", "Category"]).size().unstack(fill_value=0)
        .reindex(columns=list(SHIFT_CATEGORIES), fill_value=0)
    )
    hours = df.groupby("Person Name")["Duration (hours)"].sum().sort_values(ascending=False)

    lines = ["Coverage per day per role:"]
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Shifts per person per category:")
    lines.append(per_person.to_string())
    lines.append("")
    lines.append("Hours per person:")
    lines.append(hours.to_string())
    return "\n".join(lines)


def validate_schedule_frame(schedule_df: pd.DataFrame) -> None:
    """Same checks as ``validate_schedule`` for an exported schedule CSV."""
    if schedule_df.empty:
        return
    df = schedule_df.copy()
    unassigned = df[df["Person Email"].fillna("").astype(str).str.strip() == ""]
    if not unassigned.empty:
        raise ValueError(f"{len(unassigned)} slot(s) are unassigned")

    doubled = df.groupby(["Person Email", "Date"]).size()
    doubled = doubled[doubled > 1]
    if not doubled.empty:
        email, day = doubled.index[0]
        raise ValueError(f"Double booking detected: {email} on {day}")

    expected = ((df["Role"] == PRIMARY) & (df["Weekend"] == "Yes")).map({True: 24, False: 12})
    wrong = df[df["Duration (hours)"].astype(int) != expected]
    if not wrong.empty:
        raise ValueError(f"{len(wrong)} slot(s) have the wrong duration")

    df["Category"] = df["Weekend"].map({"Yes": "weekend", "No": "weekday"}) + "_" + df["Role"].astype(str)
    counts = df.groupby(["Category", "Person Email"]).size().unstack(fill_value=0)
    for category, row in counts.iterrows():
        spread = int(row.max() - row.min())
        if spread > 1:
            raise ValueError(f"Unfair spread in {category}: max - min = {spread}")
