"""Plain data models for on-call duty scheduling."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Set

PRIMARY = "primary"
SECONDARY = "secondary"
ROLES = (PRIMARY, SECONDARY)

WEEKDAY_PRIMARY = "weekday_primary"
WEEKEND_PRIMARY = "weekend_primary"
WEEKDAY_SECONDARY = "weekday_secondary"
WEEKEND_SECONDARY = "weekend_secondary"
SHIFT_CATEGORIES = (WEEKDAY_PRIMARY, WEEKEND_PRIMARY, WEEKDAY_SECONDARY, WEEKEND_SECONDARY)

UNASSIGNED = "UNASSIGNED"
COVERAGE_OVERRIDE_WARNING = "Assigned despite unavailable date - required coverage"


def shift_category(is_weekend: bool, role: str) -> str:
    """Key of the weekday/weekend x primary/secondary fairness bucket."""
    return f"{'weekend' if is_weekend else 'weekday'}_{role}"


@dataclass(frozen=True)
class Person:
    """A member of the duty roster. `email` is the unique key."""

    name: str
    email: str
    person_id: int

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "email": self.email, "id": self.person_id}


@dataclass
class PreferenceSet:
    """Canonical YYYY-MM-DD dates a person wants, or cannot take."""

    preferred: Set[str] = field(default_factory=set)
    not_preferred: Set[str] = field(default_factory=set)

    def status(self, date_str: str) -> str:
        if date_str in self.not_preferred:
            return "not_preferred"
        if date_str in self.preferred:
            return "preferred"
        return "neutral"

    @property
    def is_empty(self) -> bool:
        return not self.preferred and not self.not_preferred


@dataclass
class DutySlot:
    """One fillable assignment: one role, one day, one position."""

    slot_id: str
    date: date
    date_str: str
    role: str
    slot_label: str
    slot_index: int
    is_weekend: bool
    duration: int
    assigned_person: Optional[Person] = None
    warning: Optional[str] = None

    @property
    def category(self) -> str:
        return shift_category(self.is_weekend, self.role)

    @property
    def coverage_override(self) -> bool:
        return self.warning is not None

    @property
    def short_code(self) -> str:
        # e.g. "PA" for primary slot a
        return f"{self.role[0].upper()}{self.slot_label.upper()}"

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.slot_id,
            "date": self.date_str,
            "role": self.role,
            "slot": self.slot_label,
            "slotIndex": self.slot_index,
            "isWeekend": self.is_weekend,
            "duration": self.duration,
            "assignedPerson": self.assigned_person.to_dict() if self.assigned_person else None,
            "warning": self.warning,
        }


@dataclass
class LoadRecord:
    """Per-person shift counters by category plus total duty hours."""

    weekday_primary: int = 0
    weekend_primary: int = 0
    weekday_secondary: int = 0
    weekend_secondary: int = 0
    total_hours: int = 0

    def count(self, category: str) -> int:
        return getattr(self, category)

    def add(self, category: str, hours: int) -> None:
        setattr(self, category, getattr(self, category) + 1)
        self.total_hours += hours

    def remove(self, category: str, hours: int) -> None:
        setattr(self, category, getattr(self, category) - 1)
        self.total_hours -= hours

    @property
    def total_shifts(self) -> int:
        return sum(self.count(c) for c in SHIFT_CATEGORIES)


@dataclass(frozen=True)
class TargetRecord:
    """Fair share of one category: floor and ceiling of total / headcount."""

    total: int
    min: int
    max: int


@dataclass
class PersonReport:
    name: str
    email: str
    weekday_primary: int
    weekend_primary: int
    weekday_secondary: int
    weekend_secondary: int
    total_hours: int
    total_shifts: int
    preferred_assignments: int
    indifferent_assignments: int
    not_preferred_assignments: int


@dataclass
class FairnessReport:
    """Read-only snapshot of how evenly a finished schedule spreads the load."""

    by_person: List[PersonReport]
    summary: Dict[str, int]
    average_load: Dict[str, float]
    fairness_score: int

    def person(self, email: str) -> Optional[PersonReport]:
        return next((p for p in self.by_person if p.email == email), None)


@dataclass
class ScheduleResult:
    schedule: List[DutySlot]
    fairness_report: FairnessReport
