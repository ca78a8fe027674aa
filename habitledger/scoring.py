"""Score model: raw day score and its normalized percentage.

Normalization is against one unit of every habit ("did you do it at all"),
not against ``max_count``.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from habitledger.models import HabitDefinition, Number, ScoreModel, coerce_count


def potential_count(habit: HabitDefinition) -> int:
    return 1


def day_score(habits: Iterable[HabitDefinition], counts: Mapping[str, Number]) -> float:
    """Sum of count * score_per_unit over *habits*."""
    return sum(coerce_count(counts.get(h.habit_id, 0)) * h.score_per_unit for h in habits)


def score_model(habits: Iterable[HabitDefinition], counts: Mapping[str, Number]) -> ScoreModel:
    """Score a day's counts against its eligible habits."""
    score = 0.0
    max_positive = 0.0
    max_negative = 0.0

    for habit in habits:
        score += coerce_count(counts.get(habit.habit_id, 0)) * habit.score_per_unit
        potential = potential_count(habit) * habit.score_per_unit
        if habit.polarity == "bad":
            max_negative += abs(potential)
        else:
            max_positive += max(0, potential)

    if score >= 0:
        percent = score / max_positive * 100 if max_positive > 0 else 0.0
    else:
        percent = score / max_negative * 100 if max_negative > 0 else 0.0

    return ScoreModel(
        score=score,
        score_percent=max(-100.0, min(100.0, percent)),
        max_positive_score=max_positive,
        max_negative_magnitude=max_negative,
    )
