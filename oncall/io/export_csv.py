"""CSV export of a finished schedule."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List

import pandas as pd

from oncall.domain.models import UNASSIGNED, DutySlot
from oncall.services.dates import day_name

from .calendar import format_clock, slot_times

SCHEDULE_COLUMNS = [
    "Date", "Day", "Role", "Slot", "Weekend", "Duration (hours)", "Person Name", "Person Email",
]
WHEN_TO_WORK_COLUMNS = [
    "Date", "Day", "Start Time", "End Time", "Position", "Employee Name", "Employee Email",
]


def schedule_to_dataframe(schedule: List[DutySlot]) -> pd.DataFrame:
    rows = []
    for slot in schedule:
        person = slot.assigned_person
        rows.append(
            {
                "Date": slot.date_str,
                "Day": day_name(slot.date),
                "Role": slot.role,
                "Slot": slot.slot_label.upper(),
                "Weekend": "Yes" if slot.is_weekend else "No",
                "Duration (hours)": slot.duration,
                "Person Name": person.name if person else UNASSIGNED,
                "Person Email": person.email if person else "",
            }
        )
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def export_schedule_csv(schedule: List[DutySlot], path: str | Path | None = None) -> str:
    """
    Export the schedule as CSV, one row per slot.

    Args:
        schedule: Slots to export
        path: Optional file to write as well

    Returns:
        The CSV text
    """
    text = schedule_to_dataframe(schedule).to_csv(index=False, lineterminator="\n")
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
    return text


def export_when_to_work_csv(
    schedule: List[DutySlot],
    team_name: str = "RAOD",
    shift_start: str = "20:00",
    path: str | Path | None = None,
) -> str:
    """
    Export the schedule in the fully quoted WhenToWork import layout.

    Args:
        schedule: Slots to export
        team_name: Prefix for the position column
        shift_start: Clock time every shift begins
        path: Optional file to write as well

    Returns:
        The CSV text
    """
    rows = []
    for slot in schedule:
        person = slot.assigned_person
        start, end = slot_times(slot, shift_start)
        rows.append(
            {
                "Date": slot.date_str,
                "Day": day_name(slot.date),
                "Start Time": format_clock(start),
                "End Time": format_clock(end),
                "Position": f"{team_name} - {slot.role.capitalize()} {slot.slot_label.upper()}",
                "Employee Name": person.name if person else UNASSIGNED,
                "Employee Email": person.email if person else "",
            }
        )
    df = pd.DataFrame(rows, columns=WHEN_TO_WORK_COLUMNS)
    text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
    return text
