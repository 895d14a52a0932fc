"""Local search that moves single slots without leaving the fairness bounds."""

from __future__ import annotations

import logging

from oncall.config import SchedulerConfig
from oncall.domain.models import DutySlot
from oncall.services.constraints import is_available
from oncall.services.scoring import calculate_cost

from .base import BasePhase
from .state import ScheduleState

logger = logging.getLogger(__name__)


class SwapOptimizer(BasePhase):
    """
    Reassign slots whose holder is clearly a worse fit than someone else.

    The holder is priced as if the slot were released (count - 1, no
    same-day clash with the slot itself). A candidate wins only when their
    cost beats the holder's by more than ``cfg.swap_improvement_threshold``.

    Mutates: ``assigned_person`` on scheduled slots and ``state.loads``.
    """

    name = "swap"

    def run(self, state: ScheduleState, cfg: SchedulerConfig) -> ScheduleState:
        passes = 0
        moves = 0
        improved = True
        while improved and passes < cfg.max_swap_passes:
            improved = False
            passes += 1
            for slot in state.schedule:
                if self.try_improve(state, slot, cfg):
                    improved = True
                    moves += 1

        logger.info("Swap optimizer: %d move(s) in %d pass(es)", moves, passes)
        return state

    def try_improve(self, state: ScheduleState, slot: DutySlot, cfg: SchedulerConfig) -> bool:
        holder = slot.assigned_person
        if holder is None:
            return False
        category = slot.category
        target = state.targets[category]
        holder_count = state.loads.count(holder.email, category)

        # Taking the slot away must not drop the holder below their floor
        if holder_count <= target.min:
            return False

        holder_cost = calculate_cost(
            holder_count - 1, target, state.prefs(holder.email), slot, False, cfg.weights
        )

        for person in state.people:
            if person.email == holder.email:
                continue
            count = state.loads.count(person.email, category)
            if count >= target.max:
                continue
            prefs = state.prefs(person.email)
            if not is_available(prefs, slot.date_str) and count >= target.min:
                continue
            if state.has_same_day_conflict(person.email, slot.date_str, exclude=slot):
                continue

            cost = calculate_cost(count, target, prefs, slot, False, cfg.weights)
            if cost < holder_cost - cfg.swap_improvement_threshold:
                logger.debug("Swap %s: %s -> %s", slot.slot_id, holder.email, person.email)
                state.reassign(slot, person)
                return True
        return False
