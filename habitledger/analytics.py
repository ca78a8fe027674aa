"""Analytics engine for the habit ledger.

All functions here are pure: they take a snapshot of ledger entries (as
returned by ``DayRecordStore.list_records``) plus habit and badge
definitions, and never touch the store.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Mapping, Sequence

from habitledger.badges import resolve_badge
from habitledger.models import (
    AnalyticsSummary,
    Averages,
    Badge,
    BadgeDay,
    DayRecord,
    HabitDefinition,
    HabitStreak,
    OpenDay,
    TimelinePoint,
)
from habitledger.schedule import filter_eligible
from habitledger.scoring import day_score, score_model
from habitledger.streaks import (
    dates_descending,
    global_streak,
    has_progress,
    per_habit_streak,
    qualifies,
    sign_streak,
)

TIMELINE_DAYS = 30
BADGE_TIMELINE_DAYS = 120
AVERAGE_WINDOWS = (7, 30, 365)


# ── Rolling averages ──────────────────────────────────────────


def average_score(
    entries: Mapping[str, DayRecord],
    habits: Sequence[HabitDefinition],
    end_date: str,
    window_days: int,
) -> float:
    """Mean day score over the trailing window ending on *end_date*.

    Only days with progress and at least one eligible habit are averaged.
    """
    start = (date.fromisoformat(end_date) - timedelta(days=window_days - 1)).isoformat()
    scores = []
    for day in sorted(d for d in entries if start <= d <= end_date):
        record = entries[day]
        if not record.has_progress():
            continue
        eligible = filter_eligible(habits, day)
        if not eligible:
            continue
        scores.append(day_score(eligible, record.counts))
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


# ── Open day lookup ───────────────────────────────────────────


def find_open_day_in_progress(entries: Mapping[str, DayRecord], up_to_date: str) -> OpenDay | None:
    """Most recent unlocked day on or before *up_to_date* that has progress."""
    for day in dates_descending(entries, up_to_date):
        record = entries[day]
        if not record.locked and has_progress(record):
            return OpenDay(date=day, locked=False, has_progress=True)
    return None


# ── Summary ───────────────────────────────────────────────────


def compute_analytics(
    entries: Mapping[str, DayRecord],
    habits: Sequence[HabitDefinition],
    up_to_date: str,
    badges: Iterable[Badge] = (),
) -> AnalyticsSummary:
    """Compute the analytics summary for the ledger as of *up_to_date*."""
    badges = list(badges)
    habits = list(habits)
    dates = dates_descending(entries, up_to_date)
    chronological = list(reversed(dates))

    summary = AnalyticsSummary(generated_for_date=up_to_date, habit_count=len({h.habit_id for h in habits}))

    latest = entries.get(up_to_date) or DayRecord()
    habits_for_latest = filter_eligible(habits, up_to_date)
    latest_model = score_model(habits_for_latest, latest.counts)
    summary.total_score = latest_model.score
    summary.qualified_habits_for_day = sum(1 for h in habits_for_latest if qualifies(h, latest))
    summary.total_habits = len(habits_for_latest)
    summary.daily_badge = resolve_badge(latest_model.score_percent, badges)

    summary.per_habit = [
        HabitStreak(
            habit_id=habit.habit_id,
            label=habit.label,
            current_streak=per_habit_streak(habit, entries, dates),
            streak_min_count=habit.streak_min_count,
        )
        for habit in habits
    ]
    summary.global_streak = global_streak(habits, entries, dates)

    for day in chronological[-TIMELINE_DAYS:]:
        record = entries[day]
        eligible = filter_eligible(habits, day)
        model = score_model(eligible, record.counts)
        summary.timeline.append(TimelinePoint(
            date=day,
            score=model.score,
            qualified_count=sum(1 for h in eligible if qualifies(h, record)),
            total_habits=len(eligible),
            badge=resolve_badge(model.score_percent, badges),
        ))

    for day in chronological[-BADGE_TIMELINE_DAYS:]:
        model = score_model(filter_eligible(habits, day), entries[day].counts)
        summary.badge_timeline.append(BadgeDay(
            date=day,
            score=model.score,
            badge=resolve_badge(model.score_percent, badges),
        ))

    streak = sign_streak(entries, habits, up_to_date)
    summary.sign_streak = streak.length
    summary.sign_streak_is_positive = streak.is_positive

    days7, days30, days365 = (average_score(entries, habits, up_to_date, n) for n in AVERAGE_WINDOWS)
    summary.averages = Averages(days7=days7, days30=days30, days365=days365)
    return summary
