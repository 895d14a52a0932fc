"""Greedy initial fill with strict fairness gating."""

from __future__ import annotations

import logging
from typing import List, Tuple

from oncall.config import SchedulerConfig
from oncall.domain.errors import SchedulingImpossibleError
from oncall.domain.models import COVERAGE_OVERRIDE_WARNING, PRIMARY, DutySlot, Person
from oncall.services.constraints import can_take_slot, is_available
from oncall.services.dates import date_number
from oncall.services.scoring import preference_cost
from oncall.services.slots import sort_for_assignment

from .base import BasePhase
from .state import ScheduleState

logger = logging.getLogger(__name__)


class GreedyAssigner(BasePhase):
    """
    Fill every slot once, hardest first, always with a least-loaded candidate.

    Mutates: ``state.schedule`` (slots appended in processing order),
    ``state.loads``, and ``assigned_person``/``warning`` on each slot.
    """

    name = "assignment"

    def run(self, state: ScheduleState, cfg: SchedulerConfig) -> ScheduleState:
        overrides = 0
        for slot in sort_for_assignment(state.slots):
            pool, override = self.candidate_pool(state, slot)
            if override:
                slot.warning = COVERAGE_OVERRIDE_WARNING
                overrides += 1
                logger.debug("Coverage override on %s", slot.slot_id)

            chosen = self.pick(state, slot, pool, cfg)
            state.assign(slot, chosen)
            logger.debug("%s -> %s", slot.slot_id, chosen.email)

        if overrides:
            logger.warning("%d slot(s) filled despite unavailable dates", overrides)
        return state

    def candidate_pool(self, state: ScheduleState, slot: DutySlot) -> Tuple[List[Person], bool]:
        """
        Build the eligible pool for a slot.

        Returns:
            (pool, coverage_override). The override flag is set when the pool
            had to be relaxed to "anyone free that day", or when every
            candidate in it marked the date unavailable.

        Raises:
            SchedulingImpossibleError: If everyone already works that day
        """
        category = slot.category
        target = state.targets[category]

        pool = [
            p for p in state.people
            if can_take_slot(
                state.loads.count(p.email, category),
                target,
                state.prefs(p.email),
                slot.date_str,
                state.has_same_day_conflict(p.email, slot.date_str),
            )
        ]
        if pool:
            override = all(not is_available(state.prefs(p.email), slot.date_str) for p in pool)
            return pool, override

        # Last resort: anyone without a shift that day
        pool = [p for p in state.people if not state.has_same_day_conflict(p.email, slot.date_str)]
        if not pool:
            raise SchedulingImpossibleError(
                f"Cannot schedule slot {slot.slot_id}: all people are already assigned that day",
                slot=slot,
            )
        return pool, True

    def pick(self, state: ScheduleState, slot: DutySlot, pool: List[Person], cfg: SchedulerConfig) -> Person:
        """Least loaded in category first, then preference, then a date-seeded rotation."""
        category = slot.category
        lowest = min(state.loads.count(p.email, category) for p in pool)
        fair = [p for p in pool if state.loads.count(p.email, category) == lowest]

        size = len(fair)
        role_offset = 0 if slot.role == PRIMARY else 100
        seed = (date_number(slot.date_str) + slot.slot_index + role_offset) % size

        ranked = sorted(
            enumerate(fair),
            key=lambda item: (
                preference_cost(state.prefs(item[1].email), slot.date_str, cfg.weights),
                (item[0] + seed) % size,
            ),
        )
        return ranked[0][1]
