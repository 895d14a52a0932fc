"""Per-person workload counters."""

from __future__ import annotations

from typing import Dict, Iterable

from oncall.domain.models import SHIFT_CATEGORIES, DutySlot, LoadRecord


class LoadTracker:
    """
    Mutable load records keyed by email, in roster order.

    Every slot move goes through ``add`` and ``remove`` so that the
    category counter and total hours always change together.
    """

    def __init__(self, emails: Iterable[str]):
        self.records: Dict[str, LoadRecord] = {email: LoadRecord() for email in emails}

    def __getitem__(self, email: str) -> LoadRecord:
        return self.records[email]

    def count(self, email: str, category: str) -> int:
        return self.records[email].count(category)

    def add(self, email: str, slot: DutySlot) -> None:
        self.records[email].add(slot.category, slot.duration)

    def remove(self, email: str, slot: DutySlot) -> None:
        self.records[email].remove(slot.category, slot.duration)

    def counts(self, category: str) -> Dict[str, int]:
        return {email: rec.count(category) for email, rec in self.records.items()}

    def average(self) -> Dict[str, float]:
        """Mean count per category across everyone tracked (zeros when nobody is)."""
        n = len(self.records)
        if n == 0:
            return {c: 0.0 for c in SHIFT_CATEGORIES}
        return {
            c: sum(rec.count(c) for rec in self.records.values()) / n
            for c in SHIFT_CATEGORIES
        }
