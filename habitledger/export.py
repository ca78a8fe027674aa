"""Per-habit history and CSV export."""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Any, Mapping, Sequence

from habitledger.models import DayRecord, HabitDefinition, HabitHistory, HabitHistoryDay
from habitledger.schedule import is_eligible
from habitledger.workspace import DEFAULT_EXPORT_LABEL

CSV_HEADER = ["Date", "Count", "Score", "Qualified"]


def compute_habit_history(
    entries: Mapping[str, DayRecord],
    habits: Sequence[HabitDefinition],
) -> list[HabitHistory]:
    """Chronological series per habit over the ledger dates it was eligible on."""
    dates = sorted(entries)
    history = []
    for habit in habits:
        records = []
        for day in dates:
            if not is_eligible(habit, day):
                continue
            count = entries[day].count_for(habit.habit_id)
            records.append(HabitHistoryDay(
                date=day,
                count=count,
                qualified=count >= habit.streak_min_count,
                score=count * habit.score_per_unit,
            ))
        history.append(HabitHistory(
            habit_id=habit.habit_id,
            label=habit.label,
            type=habit.type,
            score_per_unit=habit.score_per_unit,
            streak_min_count=habit.streak_min_count,
            total_count=sum(r.count for r in records),
            total_score=sum(r.score for r in records),
            days_active=sum(1 for r in records if r.count > 0),
            daily_records=records,
        ))
    return history


def _fmt(value: Any) -> str:
    # 3.0 -> "3", keep real fractions as-is
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def generate_csv(
    history: Sequence[HabitHistory],
    today: str | None = None,
    label: str = DEFAULT_EXPORT_LABEL,
) -> str:
    """Render habit history as a sectioned CSV document.

    Layout: a title row, then for each habit its label, a column header,
    one row per day, and a Total row framed by empty rows.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow([label, today or date.today().isoformat()])
    writer.writerow([])

    for habit in history:
        writer.writerow([habit.label])
        writer.writerow(CSV_HEADER)
        for day in habit.daily_records:
            writer.writerow([day.date, _fmt(day.count), _fmt(day.score), "Yes" if day.qualified else "No"])
        writer.writerow(["", "", "", ""])
        writer.writerow(["Total", _fmt(habit.total_count), _fmt(habit.total_score), f"{habit.days_active} days"])
        writer.writerow(["", "", "", ""])
        writer.writerow([])

    # rows are newline-separated, not newline-terminated
    return buf.getvalue()[:-1]
