"""Habit, group and badge definitions loaded from habits.yaml.

Example::

    habits:
      - id: water
        label: Drink water
        type: counter
        score_per_unit: 1
        streak_min_count: 8
        schedule_type: custom
        schedule_days: [Mon, Wed, Fri]
    badges:
      - id: gold
        display_name: Gold
        min_score: 80
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from habitledger.fileio import read_yaml
from habitledger.models import Badge, Definitions, Group, HabitDefinition

logger = logging.getLogger(__name__)


def _rows(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    rows = data.get(key) or []
    if not isinstance(rows, list):
        logger.warning("Ignoring '%s' in definitions: expected a list", key)
        return []
    return [row for row in rows if isinstance(row, dict)]


def parse_definitions(data: dict[str, Any]) -> Definitions:
    """Apply defaults, drop rows without an id or marked inactive, sort by sort_order."""
    habits = [HabitDefinition.from_dict(row) for row in _rows(data, "habits")]
    habits = [h for h in habits if h.habit_id and h.active]

    groups = [Group.from_dict(row) for row in _rows(data, "groups")]
    groups = [g for g in groups if g.group_id]

    badges = [Badge.from_dict(row) for row in _rows(data, "badges")]
    badges = [b for b in badges if b.badge_id and b.active]

    return Definitions(
        habits=sorted(habits, key=lambda h: h.sort_order),
        groups=sorted(groups, key=lambda g: g.sort_order),
        badges=sorted(badges, key=lambda b: b.sort_order),
    )


def load_definitions(path: Path) -> Definitions:
    """Load definitions from a YAML file; a missing file yields no definitions."""
    return parse_definitions(read_yaml(path))
