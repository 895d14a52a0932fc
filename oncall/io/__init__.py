"""I/O utilities for CSV import/export and calendar display."""

from .calendar import CalendarEvent, build_calendar_events, shifts_by_week
from .export_csv import export_schedule_csv, export_when_to_work_csv, schedule_to_dataframe
from .import_csv import ImportResult, import_preferences_csv, import_roster_csv, parse_date_list

__all__ = [
    "CalendarEvent",
    "build_calendar_events",
    "shifts_by_week",
    "export_schedule_csv",
    "export_when_to_work_csv",
    "schedule_to_dataframe",
    "ImportResult",
    "import_preferences_csv",
    "import_roster_csv",
    "parse_date_list",
]
