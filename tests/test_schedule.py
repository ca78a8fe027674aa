"""Tests for habitledger/schedule.py: habit eligibility per date."""

from conftest import habit
from habitledger.schedule import filter_eligible, is_eligible

MON, WED, SAT, SUN = "2026-02-09", "2026-02-11", "2026-02-14", "2026-02-15"


def test_daily_always_eligible():
    h = habit("a")
    assert all(is_eligible(h, d) for d in (MON, WED, SAT, SUN))


def test_inactive_never_eligible():
    assert is_eligible(habit("a", active=False), MON) is False


def test_weekdays_and_weekends():
    weekdays = habit("a", schedule_type="weekdays")
    weekends = habit("b", schedule_type="weekends")
    assert is_eligible(weekdays, MON) and is_eligible(weekdays, WED)
    assert not is_eligible(weekdays, SAT) and not is_eligible(weekdays, SUN)
    assert is_eligible(weekends, SAT) and is_eligible(weekends, SUN)
    assert not is_eligible(weekends, MON)


def test_custom_days():
    h = habit("a", schedule_type="custom", schedule_days=frozenset({"Mon", "Sat"}))
    assert is_eligible(h, MON)
    assert is_eligible(h, SAT)
    assert not is_eligible(h, WED)


def test_custom_with_no_days_never_eligible():
    assert not is_eligible(habit("a", schedule_type="custom"), MON)


def test_unknown_schedule_type_defaults_to_eligible():
    assert is_eligible(habit("a", schedule_type="fortnightly"), MON)


def test_active_window_is_half_open():
    h = habit("a", active_from="2026-02-10", inactive_from="2026-02-12")
    assert not is_eligible(h, "2026-02-09")
    assert is_eligible(h, "2026-02-10")
    assert is_eligible(h, "2026-02-11")
    assert not is_eligible(h, "2026-02-12")


def test_filter_eligible_keeps_input_order():
    habits = [
        habit("z", sort_order=1),
        habit("weekend", schedule_type="weekends"),
        habit("a", sort_order=0),
    ]
    assert [h.habit_id for h in filter_eligible(habits, MON)] == ["z", "a"]
