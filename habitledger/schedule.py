"""Schedule evaluation: which habits apply on a given date."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from habitledger.models import WEEKDAY_ABBR, HabitDefinition


def is_eligible(habit: HabitDefinition, day: str) -> bool:
    """Whether *habit* applies on *day*.

    The validity window is half-open: a habit applies from ``active_from``
    up to, but not including, ``inactive_from``. Unknown schedule types
    apply every day.
    """
    if not habit.active:
        return False
    if habit.active_from and day < habit.active_from:
        return False
    if habit.inactive_from and day >= habit.inactive_from:
        return False

    schedule_type = (habit.schedule_type or "daily").lower()
    if schedule_type == "daily":
        return True

    weekday = date.fromisoformat(day).weekday()
    if schedule_type == "weekdays":
        return weekday <= 4
    if schedule_type == "weekends":
        return weekday >= 5
    if schedule_type == "custom":
        return WEEKDAY_ABBR[weekday] in habit.schedule_days
    return True


def filter_eligible(habits: Iterable[HabitDefinition], day: str) -> list[HabitDefinition]:
    """Eligible habits for *day*, in input order."""
    return [habit for habit in habits if is_eligible(habit, day)]
