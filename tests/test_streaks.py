"""Tests for habitledger/streaks.py: per-habit, global and sign streaks."""

from conftest import habit, make_entries
from habitledger.streaks import dates_descending, global_streak, per_habit_streak, sign_streak


def test_per_habit_streak_stops_at_first_miss():
    h = habit("a", streak_min_count=1)
    data = make_entries({
        "2026-02-08": {"a": 1},
        "2026-02-09": {"a": 1},
        "2026-02-10": {"a": 0},
        "2026-02-11": {"a": 1},
    })
    assert per_habit_streak(h, data, dates_descending(data, "2026-02-11")) == 1
    assert per_habit_streak(h, data, dates_descending(data, "2026-02-09")) == 2


def test_per_habit_streak_skips_ineligible_days():
    h = habit("run", schedule_type="weekdays")
    data = make_entries({
        "2026-02-06": {"run": 1},  # Fri
        "2026-02-07": {},          # Sat
        "2026-02-08": {},          # Sun
        "2026-02-09": {"run": 1},  # Mon
    })
    assert per_habit_streak(h, data, dates_descending(data, "2026-02-09")) == 2


def test_per_habit_streak_respects_min_count():
    h = habit("water", type="counter", streak_min_count=3)
    data = make_entries({"2026-02-09": {"water": 3}, "2026-02-10": {"water": 2}})
    assert per_habit_streak(h, data, dates_descending(data, "2026-02-10")) == 0
    assert per_habit_streak(h, data, dates_descending(data, "2026-02-09")) == 1


def test_global_streak_requires_all_eligible():
    habits = [habit("a"), habit("run", schedule_type="weekdays")]
    data = make_entries({
        "2026-02-06": {"a": 1, "run": 0},  # Fri, run missed
        "2026-02-07": {"a": 1},            # Sat, run not eligible
        "2026-02-09": {"a": 1, "run": 1},  # Mon
    })
    assert global_streak(habits, data, dates_descending(data, "2026-02-09")) == 2


def test_global_streak_zero_when_latest_day_has_no_eligible_habits():
    habits = [habit("run", schedule_type="weekdays")]
    data = make_entries({"2026-02-06": {"run": 1}, "2026-02-07": {"run": 1}})
    assert global_streak(habits, data, dates_descending(data, "2026-02-07")) == 0


def test_global_streak_empty_ledger():
    assert global_streak([habit("a")], {}, []) == 0


def test_sign_streak_no_progress():
    data = make_entries({"2026-02-10": {"a": 0}})
    result = sign_streak(data, [habit("a", score_per_unit=1)], "2026-02-11")
    assert result.length == 0
    assert result.is_positive is True


def test_sign_streak_counts_matching_signs():
    habits = [habit("good", score_per_unit=2), habit("bad", score_per_unit=-3, polarity="bad")]
    data = make_entries({
        "2026-02-07": {"good": 1},
        "2026-02-08": {"bad": 1},
        "2026-02-09": {"bad": 1, "good": 1},
        "2026-02-10": {"bad": 2},
        "2026-02-11": {},
    })
    result = sign_streak(data, habits, "2026-02-11")
    # base is 02-10 (latest with progress), negative; 02-09 and 02-08 negative too
    assert result.is_positive is False
    assert result.length == 3


def test_sign_streak_breaks_on_no_progress_day():
    habits = [habit("a", score_per_unit=1)]
    data = make_entries({
        "2026-02-08": {"a": 1},
        "2026-02-09": {"a": 0},
        "2026-02-10": {"a": 2},
    })
    result = sign_streak(data, habits, "2026-02-10")
    assert result.is_positive is True
    assert result.length == 1


def test_sign_streak_ignores_later_dates():
    habits = [habit("a", score_per_unit=1)]
    data = make_entries({"2026-02-09": {"a": 1}, "2026-02-12": {"a": 1}})
    assert sign_streak(data, habits, "2026-02-10").length == 1
