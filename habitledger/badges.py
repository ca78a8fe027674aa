"""Badge resolution for score percentages."""

from __future__ import annotations

from typing import Iterable, Mapping

from habitledger.models import Badge, BadgeDay, DayRecord, HabitDefinition
from habitledger.schedule import filter_eligible
from habitledger.scoring import score_model


def resolve_badge(score_percent: float, badges: Iterable[Badge]) -> Badge | None:
    """Highest active badge whose ``min_score`` is reached.

    Badges are scanned by (min_score, sort_order) and the last qualifying one
    wins, so among equal thresholds the later sort_order is chosen.
    """
    ordered = sorted(
        (b for b in badges if b.active),
        key=lambda b: (b.min_score, b.sort_order),
    )
    winner = None
    for badge in ordered:
        if score_percent >= badge.min_score:
            winner = badge
    return winner


def compute_badge_map(
    entries: Mapping[str, DayRecord],
    habits: list[HabitDefinition],
    start: str,
    end: str,
    badges: Iterable[Badge] = (),
) -> dict[str, BadgeDay]:
    """Badge per ledger date in ``[start, end]``, skipping days with no eligible habit."""
    badges = list(badges)
    result: dict[str, BadgeDay] = {}
    for day in sorted(d for d in entries if start <= d <= end):
        eligible = filter_eligible(habits, day)
        if not eligible:
            continue
        record = entries[day]
        model = score_model(eligible, record.counts)
        result[day] = BadgeDay(
            date=day,
            score=model.score,
            badge=resolve_badge(model.score_percent, badges),
            has_progress=record.has_progress(),
        )
    return result
