from datetime import date

from oncall.domain.models import PRIMARY, SECONDARY
from oncall.services.slots import generate_slots, sort_for_assignment
from oncall.services.targets import calculate_targets
from oncall.services.dates import generate_dates


def test_slot_generation_per_day_order():
    slots = generate_slots(date(2025, 1, 6), date(2025, 1, 12), 2, 1)
    assert len(slots) == 21

    first_day = slots[:3]
    assert [s.slot_id for s in first_day] == [
        "2025-01-06-primary-a",
        "2025-01-06-primary-b",
        "2025-01-06-secondary-a",
    ]
    assert all(s.assigned_person is None for s in slots)
    assert len({s.slot_id for s in slots}) == len(slots)


def test_duration_and_weekend_rules():
    slots = generate_slots(date(2025, 1, 6), date(2025, 1, 19), 3, 2)
    for s in slots:
        assert s.is_weekend == (s.date.weekday() in (4, 5))
        if s.role == PRIMARY and s.is_weekend:
            assert s.duration == 24
        else:
            assert s.duration == 12

    friday_primary = next(s for s in slots if s.date_str == "2025-01-10" and s.role == PRIMARY)
    friday_secondary = next(s for s in slots if s.date_str == "2025-01-10" and s.role == SECONDARY)
    assert friday_primary.duration == 24
    assert friday_secondary.duration == 12
    assert friday_primary.category == "weekend_primary"


def test_inverted_range_gives_no_slots():
    assert generate_slots(date(2025, 1, 12), date(2025, 1, 6), 1, 1) == []


def test_zero_counts_give_no_slots_for_that_role():
    slots = generate_slots(date(2025, 1, 6), date(2025, 1, 8), 0, 2)
    assert len(slots) == 6
    assert {s.role for s in slots} == {SECONDARY}


def test_processing_order_is_by_date_then_primary_first():
    slots = generate_slots(date(2025, 1, 6), date(2025, 1, 12), 1, 1)
    ordered = sort_for_assignment(list(reversed(slots)))
    dates = [s.date for s in ordered]
    assert dates == sorted(dates)
    for i in range(0, len(ordered), 2):
        assert ordered[i].role == PRIMARY
        assert ordered[i + 1].role == SECONDARY


def test_targets_floor_and_ceiling():
    dates = generate_dates(date(2025, 1, 6), date(2025, 1, 12))
    targets = calculate_targets(dates, 1, 1, 5)

    assert targets["weekday_primary"].total == 5
    assert targets["weekday_primary"].min == 1
    assert targets["weekday_primary"].max == 1
    assert targets["weekend_primary"].total == 2
    assert targets["weekend_primary"].min == 0
    assert targets["weekend_primary"].max == 1


def test_targets_with_nobody_to_share():
    dates = generate_dates(date(2025, 1, 6), date(2025, 1, 12))
    targets = calculate_targets(dates, 1, 0, 0)
    assert targets["weekday_primary"].min == 0
    assert targets["weekday_primary"].max == 0
    assert targets["weekday_secondary"].total == 0
