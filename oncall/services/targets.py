"""Fair share per shift-type category."""

from __future__ import annotations

import math
from datetime import date
from typing import Dict, List

from oncall.domain.models import (
    WEEKDAY_PRIMARY,
    WEEKDAY_SECONDARY,
    WEEKEND_PRIMARY,
    WEEKEND_SECONDARY,
    TargetRecord,
)
from oncall.services.dates import is_weekend_night


def make_target(total: int, headcount: int) -> TargetRecord:
    if headcount <= 0:
        return TargetRecord(total=total, min=0, max=0)
    return TargetRecord(
        total=total,
        min=total // headcount,
        max=math.ceil(total / headcount),
    )


def calculate_targets(
    dates: List[date],
    primary_count: int,
    secondary_count: int,
    headcount: int,
) -> Dict[str, TargetRecord]:
    """
    Build the min/max shift count each person should end up with.

    Args:
        dates: Every day being scheduled
        primary_count: Primary slots per day
        secondary_count: Secondary slots per day
        headcount: Number of people sharing the load

    Returns:
        Dict of category -> TargetRecord
    """
    weekend_days = sum(1 for d in dates if is_weekend_night(d))
    weekday_days = len(dates) - weekend_days

    return {
        WEEKDAY_PRIMARY: make_target(weekday_days * primary_count, headcount),
        WEEKEND_PRIMARY: make_target(weekend_days * primary_count, headcount),
        WEEKDAY_SECONDARY: make_target(weekday_days * secondary_count, headcount),
        WEEKEND_SECONDARY: make_target(weekend_days * secondary_count, headcount),
    }
