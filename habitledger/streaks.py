"""Streak calculations over the ledger.

Streaks walk ledger dates from newest to oldest. Dates without a record are
not visited, so gaps in the ledger neither extend nor break a streak.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from habitledger.models import DayRecord, HabitDefinition, SignStreak
from habitledger.schedule import filter_eligible, is_eligible
from habitledger.scoring import day_score


def has_progress(record: DayRecord | None) -> bool:
    return record is not None and record.has_progress()


def dates_descending(entries: Mapping[str, DayRecord], up_to_date: str) -> list[str]:
    return sorted((d for d in entries if d <= up_to_date), reverse=True)


def qualifies(habit: HabitDefinition, record: DayRecord) -> bool:
    return record.count_for(habit.habit_id) >= habit.streak_min_count


def per_habit_streak(
    habit: HabitDefinition,
    entries: Mapping[str, DayRecord],
    dates: Sequence[str],
) -> int:
    """Consecutive qualifying eligible days, newest first.

    Days the habit is not scheduled on are skipped.
    """
    streak = 0
    for day in dates:
        if not is_eligible(habit, day):
            continue
        if not qualifies(habit, entries[day]):
            break
        streak += 1
    return streak


def global_streak(
    habits: Sequence[HabitDefinition],
    entries: Mapping[str, DayRecord],
    dates: Sequence[str],
) -> int:
    """Consecutive days on which every eligible habit qualified.

    A day with no eligible habits ends the streak.
    """
    streak = 0
    for day in dates:
        eligible = filter_eligible(habits, day)
        if not eligible:
            break
        record = entries[day]
        if not all(qualifies(habit, record) for habit in eligible):
            break
        streak += 1
    return streak


def sign_streak(
    entries: Mapping[str, DayRecord],
    habits: Sequence[HabitDefinition],
    up_to_date: str,
) -> SignStreak:
    """Consecutive days with progress whose score sign matches the latest such day."""
    dates = dates_descending(entries, up_to_date)
    base = next((day for day in dates if has_progress(entries[day])), None)
    if base is None:
        return SignStreak(length=0, is_positive=True)

    def score_on(day: str) -> float:
        return day_score(filter_eligible(habits, day), entries[day].counts)

    is_positive = score_on(base) >= 0
    length = 0
    for day in dates:
        if day > base:
            continue
        if not has_progress(entries[day]):
            break
        if (score_on(day) >= 0) != is_positive:
            break
        length += 1
    return SignStreak(length=length, is_positive=is_positive)
