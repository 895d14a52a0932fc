"""OnCallScheduler - the engine surface that runs every phase over one roster."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from oncall.config import SchedulerConfig, clamp_count
from oncall.domain.errors import CapacityError, ConfigurationError
from oncall.domain.models import DutySlot, Person, PreferenceSet, ScheduleResult
from oncall.domain.roster import Roster
from oncall.io.calendar import CalendarEvent, build_calendar_events, shifts_by_week
from oncall.io.export_csv import export_schedule_csv, export_when_to_work_csv
from oncall.services.dates import generate_dates, normalize_date, parse_local_date
from oncall.services.fairness import generate_fairness_report
from oncall.services.slots import generate_slots, make_slot
from oncall.services.targets import calculate_targets

from .assignment import GreedyAssigner
from .balancer import Balancer
from .base import BasePhase
from .optimizer import SwapOptimizer
from .state import ScheduleState

logger = logging.getLogger(__name__)


def default_phases() -> List[BasePhase]:
    return [GreedyAssigner(), SwapOptimizer(), Balancer()]


class OnCallScheduler:
    """
    Assigns roster members to primary and secondary night duty over a date range.

    Every instance owns its roster, preferences and last schedule; nothing
    is shared between instances. A call to ``generate_schedule`` recomputes
    slots, loads and targets from scratch and replaces the schedule only
    when the whole run succeeds.
    """

    def __init__(self, cfg: SchedulerConfig | None = None, phases: List[BasePhase] | None = None):
        """
        Initialize the engine.

        Args:
            cfg: SchedulerConfig (defaults apply when omitted)
            phases: Phase pipeline (default: assignment, swap, balance)
        """
        self.cfg = cfg or SchedulerConfig()
        self.phases = phases if phases is not None else default_phases()
        self.roster = Roster()
        self.primary_count = self.cfg.primary_count
        self.secondary_count = self.cfg.secondary_count
        self.start_date: Optional[date] = None
        self.end_date: Optional[date] = None
        self.schedule: List[DutySlot] = []

    # Roster and preferences

    @property
    def people(self) -> List[Person]:
        return self.roster.people

    @property
    def preferences(self) -> Dict[str, PreferenceSet]:
        return self.roster.preferences

    def add_person(self, name: str, email: str, person_id: int | None = None) -> Person:
        return self.roster.add_person(name, email, person_id)

    def remove_person(self, email: str) -> None:
        self.roster.remove_person(email)

    def set_preferences(self, email: str, preferred: Iterable, not_preferred: Iterable) -> PreferenceSet:
        return self.roster.set_preferences(email, preferred, not_preferred)

    # Run configuration

    def set_shift_counts(self, primary: int, secondary: int) -> None:
        self.primary_count = clamp_count(primary)
        self.secondary_count = clamp_count(secondary)

    def set_date_range(self, start, end) -> None:
        self.start_date = parse_local_date(start)
        self.end_date = parse_local_date(end)

    def generate_dates(self) -> List[date]:
        return generate_dates(self.start_date, self.end_date)

    # Scheduling

    def generate_schedule(self) -> ScheduleResult:
        """
        Run assignment, swap optimization and balancing, then report fairness.

        Returns:
            ScheduleResult with the schedule and its fairness report

        Raises:
            CapacityError: If the roster cannot cover one day's slots
            ConfigurationError: If the date range is not set
            SchedulingImpossibleError: If a slot has no eligible candidate
        """
        per_day = self.primary_count + self.secondary_count
        headcount = len(self.roster)
        if headcount < per_day:
            raise CapacityError(
                f"Need at least {per_day} people to schedule "
                f"({self.primary_count} primary + {self.secondary_count} secondary per day)"
            )
        if self.start_date is None or self.end_date is None:
            raise ConfigurationError("Date range not set")

        dates = self.generate_dates()
        slots = generate_slots(self.start_date, self.end_date, self.primary_count, self.secondary_count)
        targets = calculate_targets(dates, self.primary_count, self.secondary_count, headcount)
        state = ScheduleState.create(self.roster.people, self.roster.preferences, slots, targets)

        logger.info(
            "Scheduling %d slot(s) over %d day(s) for %d people", len(slots), len(dates), headcount
        )
        for phase in self.phases:
            logger.info("Running %s phase", phase.get_phase_name())
            state = phase.run(state, self.cfg)

        self.schedule = state.schedule
        report = generate_fairness_report(state.people, state.preferences, state.schedule, state.loads, dates)
        logger.info("Schedule complete: fairness score %d", report.fairness_score)
        return ScheduleResult(schedule=self.schedule, fairness_report=report)

    # Projections

    def get_calendar_events(
        self,
        filter_person: str | None = None,
        filter_role: str | None = None,
    ) -> List[CalendarEvent]:
        return build_calendar_events(self.schedule, filter_person, filter_role, self.cfg.shift_start)

    def get_shifts_by_week(self) -> Dict[str, List[Dict[str, Any]]]:
        return shifts_by_week(self.schedule, self.cfg.shift_start)

    def export_to_csv(self) -> str:
        return export_schedule_csv(self.schedule)

    def export_for_when_to_work(self, team_name: str | None = None) -> str:
        return export_when_to_work_csv(self.schedule, team_name or self.cfg.team_name, self.cfg.shift_start)

    # Plain-data snapshot

    def to_dict(self) -> Dict[str, Any]:
        """Roster, preferences, counts, range and schedule as JSON-ready data."""
        prefs = self.roster.preferences
        return {
            "startDate": normalize_date(self.start_date) if self.start_date else None,
            "endDate": normalize_date(self.end_date) if self.end_date else None,
            "primaryCount": self.primary_count,
            "secondaryCount": self.secondary_count,
            "people": [p.to_dict() for p in self.roster.people],
            "preferences": [
                {
                    "email": email,
                    "preferred": sorted(p.preferred),
                    "notPreferred": sorted(p.not_preferred),
                }
                for email, p in prefs.items()
            ],
            "schedule": [s.to_dict() for s in self.schedule],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], cfg: SchedulerConfig | None = None) -> "OnCallScheduler":
        scheduler = cls(cfg)
        scheduler.set_shift_counts(
            data.get("primaryCount", scheduler.primary_count),
            data.get("secondaryCount", scheduler.secondary_count),
        )
        if data.get("startDate") and data.get("endDate"):
            scheduler.set_date_range(data["startDate"], data["endDate"])

        for person in data.get("people", []):
            scheduler.add_person(person["name"], person["email"], person.get("id"))
        for pref in data.get("preferences", []):
            scheduler.set_preferences(pref["email"], pref.get("preferred", []), pref.get("notPreferred", []))

        for raw in data.get("schedule", []):
            slot = make_slot(parse_local_date(raw["date"]), raw["role"], int(raw["slotIndex"]))
            holder = raw.get("assignedPerson")
            if holder:
                slot.assigned_person = scheduler.roster.get(holder["email"]) or Person(
                    name=holder["name"], email=holder["email"], person_id=holder.get("id", 0)
                )
            slot.warning = raw.get("warning")
            scheduler.schedule.append(slot)
        return scheduler


def build_schedule(
    people: Iterable[tuple],
    start,
    end,
    cfg: SchedulerConfig | None = None,
    preferences: Dict[str, tuple] | None = None,
) -> ScheduleResult:
    """
    Convenience function to schedule a roster in one call.

    Args:
        people: (name, email) pairs
        start: First day (date-like)
        end: Last day, inclusive (date-like)
        cfg: SchedulerConfig; shift counts are taken from it
        preferences: email -> (preferred dates, not-preferred dates)

    Returns:
        ScheduleResult
    """
    scheduler = OnCallScheduler(cfg)
    for name, email in people:
        scheduler.add_person(name, email)
    for email, (preferred, not_preferred) in (preferences or {}).items():
        scheduler.set_preferences(email, preferred, not_preferred)
    scheduler.set_date_range(start, end)
    return scheduler.generate_schedule()
