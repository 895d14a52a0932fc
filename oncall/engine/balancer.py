"""Final pass that evens out category counts to a spread of at most one."""

from __future__ import annotations

import logging
from typing import List

from oncall.config import SchedulerConfig
from oncall.domain.models import SHIFT_CATEGORIES
from oncall.services.constraints import preference_rank

from .base import BasePhase
from .state import ScheduleState

logger = logging.getLogger(__name__)


class Balancer(BasePhase):
    """
    Move slots from the most loaded to the least loaded person per category.

    Tries a direct transfer first and a three-way rotation through a
    middle-loaded person second. A category whose spread cannot be reduced
    further is left as is and logged.

    Mutates: ``assigned_person`` on scheduled slots and ``state.loads``.
    """

    name = "balance"

    def run(self, state: ScheduleState, cfg: SchedulerConfig) -> ScheduleState:
        if not state.people:
            return state
        for category in SHIFT_CATEGORIES:
            if state.targets[category].total == 0:
                continue
            self.balance_category(state, category, cfg.max_balance_iterations)
        return state

    def balance_category(self, state: ScheduleState, category: str, max_iterations: int) -> int:
        """Returns the number of moves made."""
        moves = 0
        for _ in range(max_iterations):
            counts = state.loads.counts(category)
            low = min(counts.values())
            high = max(counts.values())
            if high - low <= 1:
                break

            donors = [email for email, c in counts.items() if c == high]
            recipients = [email for email, c in counts.items() if c == low]

            if self.direct_transfer(state, category, donors, recipients):
                moves += 1
                continue
            middle = [email for email, c in counts.items() if low < c < high]
            if self.triangle_rotation(state, category, donors, middle, recipients):
                moves += 1
                continue

            logger.warning(
                "Balancer: %s left with spread %d (max %d, min %d)", category, high - low, high, low
            )
            break

        if moves:
            logger.info("Balancer: %d move(s) in %s", moves, category)
        return moves

    def direct_transfer(
        self,
        state: ScheduleState,
        category: str,
        donors: List[str],
        recipients: List[str],
    ) -> bool:
        for donor in donors:
            for slot in state.slots_held(donor, category):
                free = [r for r in recipients if not state.has_same_day_conflict(r, slot.date_str)]
                if not free:
                    continue
                # stable: roster order among equally happy recipients
                free.sort(key=lambda r: preference_rank(state.prefs(r), slot.date_str))
                state.reassign(slot, state.person(free[0]))
                logger.debug("Transfer %s: %s -> %s", slot.slot_id, donor, free[0])
                return True
        return False

    def triangle_rotation(
        self,
        state: ScheduleState,
        category: str,
        donors: List[str],
        middle: List[str],
        recipients: List[str],
    ) -> bool:
        """Donor slot to a middle person, one of the middle person's slots to a recipient."""
        for donor in donors:
            for donor_slot in state.slots_held(donor, category):
                for mid in middle:
                    if state.has_same_day_conflict(mid, donor_slot.date_str):
                        continue
                    for mid_slot in state.slots_held(mid, category):
                        if mid_slot.date_str == donor_slot.date_str:
                            continue
                        recipient = next(
                            (r for r in recipients if not state.has_same_day_conflict(r, mid_slot.date_str)),
                            None,
                        )
                        if recipient is None:
                            continue
                        state.reassign(donor_slot, state.person(mid))
                        state.reassign(mid_slot, state.person(recipient))
                        logger.debug(
                            "Rotate %s: %s -> %s, %s: %s -> %s",
                            donor_slot.slot_id, donor, mid, mid_slot.slot_id, mid, recipient,
                        )
                        return True
        return False
