import json
from collections import Counter
from datetime import date, timedelta

import pytest

from oncall.domain.errors import CapacityError, ConfigurationError, SchedulingImpossibleError
from oncall.domain.models import PRIMARY, SECONDARY, SHIFT_CATEGORIES
from oncall.engine.assignment import GreedyAssigner
from oncall.engine.orchestrator import OnCallScheduler, build_schedule
from oncall.engine.state import ScheduleState
from oncall.config import SchedulerConfig
from oncall.services.dates import generate_dates
from oncall.services.fairness import fairness_score
from oncall.services.slots import generate_slots
from oncall.services.targets import calculate_targets


def _category_counts(schedule, people):
    counts = {c: Counter({p.email: 0 for p in people}) for c in SHIFT_CATEGORIES}
    for slot in schedule:
        counts[slot.category][slot.assigned_person.email] += 1
    return counts


def _assert_fair(schedule, people):
    for category, counts in _category_counts(schedule, people).items():
        values = list(counts.values())
        assert max(values) - min(values) <= 1, f"{category}: {dict(counts)}"


def _assert_no_double_booking(schedule):
    per_day = Counter((s.assigned_person.email, s.date_str) for s in schedule)
    assert max(per_day.values()) == 1


def test_small_team_one_week(make_scheduler):
    scheduler = make_scheduler(5)
    result = scheduler.generate_schedule()

    assert len(result.schedule) == 14
    assert all(s.assigned_person is not None for s in result.schedule)
    _assert_no_double_booking(result.schedule)
    _assert_fair(result.schedule, scheduler.people)
    assert scheduler.schedule is result.schedule


def test_everyone_unavailable_still_covers_every_slot(make_scheduler):
    scheduler = make_scheduler(8, "2025-01-06", "2025-01-19", primary=2, secondary=2)
    all_days = [d.isoformat() for d in scheduler.generate_dates()]
    for person in scheduler.people:
        scheduler.set_preferences(person.email, [], all_days)

    result = scheduler.generate_schedule()

    assert len(result.schedule) == 14 * 4
    assert all(s.assigned_person is not None for s in result.schedule)
    assert all(s.coverage_override for s in result.schedule)
    assert all(s.warning == "Assigned despite unavailable date - required coverage" for s in result.schedule)
    _assert_no_double_booking(result.schedule)
    _assert_fair(result.schedule, scheduler.people)


def test_insufficient_headcount(make_scheduler):
    scheduler = make_scheduler(3, primary=2, secondary=2)
    with pytest.raises(CapacityError, match="Need at least 4 people"):
        scheduler.generate_schedule()
    assert scheduler.schedule == []


def test_capacity_checked_before_date_range():
    scheduler = OnCallScheduler()
    scheduler.add_person("Solo", "solo@example.com")
    with pytest.raises(CapacityError):
        scheduler.generate_schedule()


def test_missing_date_range(make_scheduler):
    scheduler = make_scheduler(3)
    scheduler.start_date = None
    with pytest.raises(ConfigurationError, match="Date range not set"):
        scheduler.generate_schedule()


def test_failed_run_keeps_previous_schedule(make_scheduler):
    scheduler = make_scheduler(3)
    previous = scheduler.generate_schedule().schedule

    scheduler.remove_person("ra3@example.com")
    scheduler.remove_person("ra2@example.com")
    with pytest.raises(CapacityError):
        scheduler.generate_schedule()
    assert scheduler.schedule is previous


def test_same_inputs_same_schedule(make_scheduler):
    first = make_scheduler(6, "2025-01-06", "2025-01-26", primary=2, secondary=1)
    second = make_scheduler(6, "2025-01-06", "2025-01-26", primary=2, secondary=1)
    for s in (first, second):
        s.set_preferences("ra2@example.com", ["2025-01-08"], ["2025-01-10", "2025-01-11"])

    a = [(s.slot_id, s.assigned_person.email) for s in first.generate_schedule().schedule]
    b = [(s.slot_id, s.assigned_person.email) for s in second.generate_schedule().schedule]
    assert a == b


def test_instances_do_not_share_state(make_scheduler):
    first = make_scheduler(4)
    second = make_scheduler(4)
    first.add_person("Extra", "extra@example.com")
    first.set_preferences("ra1@example.com", [], ["2025-01-06"])

    assert len(second.people) == 4
    assert second.preferences["ra1@example.com"].is_empty


def test_unavailable_date_respected_when_others_can_cover(make_scheduler):
    scheduler = make_scheduler(5, primary=1, secondary=0)
    scheduler.set_preferences("ra1@example.com", [], ["2025-01-06"])
    result = scheduler.generate_schedule()

    monday = [s for s in result.schedule if s.date_str == "2025-01-06"]
    assert all(s.assigned_person.email != "ra1@example.com" for s in monday)
    assert not any(s.coverage_override for s in result.schedule)


def test_preferred_date_wins_among_equally_loaded(make_scheduler):
    scheduler = make_scheduler(5, primary=1, secondary=0)
    scheduler.set_preferences("ra2@example.com", ["2025-01-07"], [])
    result = scheduler.generate_schedule()

    tuesday = next(s for s in result.schedule if s.date_str == "2025-01-07")
    assert tuesday.assigned_person.email == "ra2@example.com"


def test_fairness_overrides_unavailability(make_scheduler):
    # three people, three weekday nights: each must take exactly one
    scheduler = make_scheduler(3, "2025-01-06", "2025-01-08", primary=1, secondary=0)
    for person in scheduler.people:
        scheduler.set_preferences(person.email, [], ["2025-01-07"])
    result = scheduler.generate_schedule()

    by_date = {s.date_str: s for s in result.schedule}
    assert by_date["2025-01-06"].warning is None
    assert by_date["2025-01-07"].coverage_override
    _assert_fair(result.schedule, scheduler.people)


def test_impossible_slot_raises():
    people_scheduler = OnCallScheduler()
    people_scheduler.add_person("Solo", "solo@example.com")
    day = date(2025, 1, 6)
    slots = generate_slots(day, day, 2, 0)
    targets = calculate_targets([day], 2, 0, 1)
    state = ScheduleState.create(people_scheduler.people, people_scheduler.preferences, slots, targets)

    with pytest.raises(SchedulingImpossibleError) as exc:
        GreedyAssigner().run(state, SchedulerConfig())
    assert exc.value.slot.slot_id == "2025-01-06-primary-b"
    assert "all people are already assigned that day" in str(exc.value)


def test_report_score_matches_counts(make_scheduler):
    scheduler = make_scheduler(7, "2025-01-06", "2025-01-19", primary=2, secondary=1)
    result = scheduler.generate_schedule()
    report = result.fairness_report

    counts = _category_counts(result.schedule, scheduler.people)
    n = len(scheduler.people)
    variance = 0.0
    for category in SHIFT_CATEGORIES:
        avg = sum(counts[category].values()) / n
        variance += sum((v - avg) ** 2 for v in counts[category].values())
    variance /= n * len(SHIFT_CATEGORIES)

    assert report.fairness_score == fairness_score(variance)
    assert report.summary == {"total_shifts": 42, "total_days": 14, "weekend_days": 4}
    assert sum(p.total_shifts for p in report.by_person) == 42
    assert sum(p.total_hours for p in report.by_person) == sum(s.duration for s in result.schedule)


def test_custom_phase_pipeline(make_scheduler):
    scheduler = make_scheduler(4)
    scheduler.phases = [GreedyAssigner()]
    result = scheduler.generate_schedule()
    assert all(s.assigned_person is not None for s in result.schedule)


def test_shift_counts_are_clamped():
    scheduler = OnCallScheduler()
    scheduler.set_shift_counts(15, -2)
    assert scheduler.primary_count == 10
    assert scheduler.secondary_count == 0


def test_zero_secondary_schedules_primary_only(make_scheduler):
    scheduler = make_scheduler(2, primary=1, secondary=0)
    result = scheduler.generate_schedule()
    assert {s.role for s in result.schedule} == {PRIMARY}
    assert len(result.schedule) == 7


def test_snapshot_roundtrip(make_scheduler):
    scheduler = make_scheduler(4)
    scheduler.set_preferences("ra1@example.com", ["2025-01-08"], ["2025-01-10"])
    scheduler.generate_schedule()

    data = json.loads(json.dumps(scheduler.to_dict()))
    assert data["startDate"] == "2025-01-06"
    assert data["primaryCount"] == 1

    restored = OnCallScheduler.from_dict(data)
    assert [p.email for p in restored.people] == [p.email for p in scheduler.people]
    assert restored.preferences["ra1@example.com"].not_preferred == {"2025-01-10"}
    assert [(s.slot_id, s.assigned_person.email) for s in restored.schedule] == [
        (s.slot_id, s.assigned_person.email) for s in scheduler.schedule
    ]
    assert restored.export_to_csv() == scheduler.export_to_csv()


def test_build_schedule_helper():
    people = [(f"RA {i}", f"ra{i}@example.com") for i in range(1, 5)]
    result = build_schedule(
        people,
        "2025-01-06",
        "2025-01-12",
        SchedulerConfig(primary_count=1, secondary_count=1),
        preferences={"ra1@example.com": (["2025-01-06"], [])},
    )
    assert len(result.schedule) == 14
    assert result.fairness_report.person("ra1@example.com") is not None


def _grid():
    for team in (6, 8, 10):
        for weeks in (1, 2, 4):
            for primary, secondary in ((1, 1), (2, 1), (2, 2)):
                if team >= primary + secondary + 3:
                    yield team, weeks, primary, secondary


@pytest.mark.slow
@pytest.mark.parametrize("team,weeks,primary,secondary", list(_grid()))
def test_fairness_and_coverage_grid(make_scheduler, team, weeks, primary, secondary):
    start = date(2025, 1, 6)
    end = start + timedelta(days=7 * weeks - 1)
    scheduler = make_scheduler(team, start, end, primary=primary, secondary=secondary)

    days = generate_dates(start, end)
    for i, person in enumerate(scheduler.people):
        if i % 5 == 4:
            unavailable = days
        else:
            unavailable = [d for k, d in enumerate(days) if (k + i) % 5 == 0]
        preferred = [d for k, d in enumerate(days) if (k + i) % 7 == 3 and d not in unavailable]
        scheduler.set_preferences(person.email, preferred, unavailable)

    result = scheduler.generate_schedule()

    assert len(result.schedule) == len(days) * (primary + secondary)
    assert all(s.assigned_person is not None for s in result.schedule)
    assert Counter(s.role for s in result.schedule) == {
        PRIMARY: len(days) * primary,
        SECONDARY: len(days) * secondary,
    }
    _assert_no_double_booking(result.schedule)
    _assert_fair(result.schedule, scheduler.people)
