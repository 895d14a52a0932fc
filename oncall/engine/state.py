"""State owned by a single scheduling run."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

from oncall.domain.models import DutySlot, Person, PreferenceSet, TargetRecord
from oncall.services.load import LoadTracker


@dataclass
class ScheduleState:
    """
    Everything one run reads and mutates, passed explicitly between phases.

    ``people``, ``preferences``, ``slots`` and ``targets`` are fixed for the
    run. Phases change ``schedule`` (append order and ``assigned_person`` /
    ``warning`` on slots) and ``loads``, and only through ``assign`` and
    ``reassign`` so that the same-day index stays in step.
    """

    people: List[Person]
    preferences: Dict[str, PreferenceSet]
    slots: List[DutySlot]
    targets: Dict[str, TargetRecord]
    loads: LoadTracker
    schedule: List[DutySlot] = field(default_factory=list)
    _by_day: Dict[str, Counter] = field(default_factory=lambda: defaultdict(Counter), repr=False)

    @classmethod
    def create(
        cls,
        people: List[Person],
        preferences: Dict[str, PreferenceSet],
        slots: List[DutySlot],
        targets: Dict[str, TargetRecord],
    ) -> "ScheduleState":
        return cls(
            people=list(people),
            preferences=dict(preferences),
            slots=slots,
            targets=targets,
            loads=LoadTracker(p.email for p in people),
        )

    def prefs(self, email: str) -> PreferenceSet | None:
        return self.preferences.get(email)

    def person(self, email: str) -> Person:
        return next(p for p in self.people if p.email == email)

    def has_same_day_conflict(self, email: str, date_str: str, exclude: DutySlot | None = None) -> bool:
        """True if ``email`` holds a slot on ``date_str`` other than ``exclude``."""
        held = self._by_day[date_str][email]
        if (
            exclude is not None
            and exclude.date_str == date_str
            and exclude.assigned_person is not None
            and exclude.assigned_person.email == email
        ):
            held -= 1
        return held > 0

    def assign(self, slot: DutySlot, person: Person) -> None:
        """First fill of an empty slot; the slot joins the schedule."""
        slot.assigned_person = person
        self.loads.add(person.email, slot)
        self._by_day[slot.date_str][person.email] += 1
        self.schedule.append(slot)

    def reassign(self, slot: DutySlot, person: Person) -> None:
        """Move an already scheduled slot to another person."""
        previous = slot.assigned_person
        if previous is not None:
            self.loads.remove(previous.email, slot)
            self._by_day[slot.date_str][previous.email] -= 1
        slot.assigned_person = person
        self.loads.add(person.email, slot)
        self._by_day[slot.date_str][person.email] += 1

    def slots_held(self, email: str, category: str) -> List[DutySlot]:
        return [
            s for s in self.schedule
            if s.assigned_person is not None
            and s.assigned_person.email == email
            and s.category == category
        ]
