"""Eligibility predicates shared by the assignment phases."""

from __future__ import annotations

from oncall.domain.models import PreferenceSet, TargetRecord


def is_available(prefs: PreferenceSet | None, date_str: str) -> bool:
    """False when the person marked the date as not preferred."""
    return not (prefs is not None and date_str in prefs.not_preferred)


def can_take_slot(
    count: int,
    target: TargetRecord,
    prefs: PreferenceSet | None,
    date_str: str,
    has_same_day: bool,
) -> bool:
    """
    Check if a person may receive a slot without breaking a hard rule.

    Args:
        count: Person's current count in the slot's category
        target: Category target
        prefs: Person's preferences
        date_str: Canonical date of the slot
        has_same_day: Whether the person already works that day

    Returns:
        True if the person is eligible, False otherwise
    """
    # 1. Never above the fair ceiling
    if count >= target.max:
        return False

    # 2. One slot per person per day
    if has_same_day:
        return False

    # 3. Below the floor overrides stated unavailability
    if count < target.min:
        return True

    return is_available(prefs, date_str)


def preference_rank(prefs: PreferenceSet | None, date_str: str) -> int:
    """-1 preferred, 0 neutral, 1 not preferred."""
    if prefs is None:
        return 0
    status = prefs.status(date_str)
    if status == "preferred":
        return -1
    if status == "not_preferred":
        return 1
    return 0
