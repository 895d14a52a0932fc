"""Services for scheduling logic."""

from .constraints import can_take_slot, is_available, preference_rank
from .dates import generate_dates, is_weekend_night, normalize_date, parse_local_date
from .fairness import fairness_score, generate_fairness_report
from .load import LoadTracker
from .scoring import calculate_cost, preference_cost
from .slots import generate_slots, sort_for_assignment
from .targets import calculate_targets

__all__ = [
    "can_take_slot",
    "is_available",
    "preference_rank",
    "generate_dates",
    "is_weekend_night",
    "normalize_date",
    "parse_local_date",
    "fairness_score",
    "generate_fairness_report",
    "LoadTracker",
    "calculate_cost",
    "preference_cost",
    "generate_slots",
    "sort_for_assignment",
    "calculate_targets",
]
