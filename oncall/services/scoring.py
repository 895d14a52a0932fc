"""Cost of giving a slot to a person. Lower is better."""

from __future__ import annotations

from oncall.config import CostWeights
from oncall.domain.models import DutySlot, PreferenceSet, TargetRecord


def preference_cost(prefs: PreferenceSet | None, date_str: str, weights: CostWeights) -> int:
    """
    Preference adjustment for one date.

    Args:
        prefs: Person's preferences (None counts as neutral)
        date_str: Canonical date
        weights: Cost constants

    Returns:
        ``weights.preferred_bonus`` for a preferred date,
        ``weights.not_preferred_penalty`` for an unavailable one, else 0
    """
    if prefs is None:
        return 0
    if date_str in prefs.not_preferred:
        return weights.not_preferred_penalty
    if date_str in prefs.preferred:
        return weights.preferred_bonus
    return 0


def calculate_cost(
    count: int,
    target: TargetRecord | None,
    prefs: PreferenceSet | None,
    slot: DutySlot,
    has_same_day: bool,
    weights: CostWeights,
) -> int:
    """
    Calculate the cost of assigning ``slot`` to a person.

    The category count dominates everything else, so that preferences only
    ever decide between people carrying the same load.

    Args:
        count: Person's current count in the slot's category
        target: Category target (None skips the fairness terms)
        prefs: Person's preferences
        slot: Slot being priced
        has_same_day: Whether the person already works that day
        weights: Cost constants

    Returns:
        Integer cost
    """
    cost = count * weights.count_weight

    if target is not None:
        if count >= target.min:
            cost += weights.at_min_penalty
        if count >= target.max:
            cost += weights.at_max_penalty

    cost += preference_cost(prefs, slot.date_str, weights)

    if slot.is_weekend:
        cost += weights.weekend_tiebreak

    if has_same_day:
        cost += weights.same_day_penalty

    return cost
