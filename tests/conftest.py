"""Shared test fixtures for habit ledger tests."""

from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import yaml

from habitledger.models import Badge, DayRecord, HabitDefinition
from habitledger.store import DayRecordStore

TODAY = "2026-02-11"  # a Wednesday


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary data root with settings, definitions and a ledger."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    settings = {"timezone": "UTC", "export_label": "Test Export"}
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    definitions = {
        "groups": [{"id": "health", "label": "Health", "sort_order": 1}],
        "habits": [
            {
                "id": "water",
                "label": "Drink water",
                "type": "counter",
                "group": "health",
                "score_per_unit": 1,
                "streak_min_count": 2,
                "max_count": 12,
                "sort_order": 2,
            },
            {
                "id": "run",
                "label": "Run",
                "type": "toggle",
                "group": "health",
                "score_per_unit": 5,
                "schedule_type": "weekdays",
                "sort_order": 1,
            },
            {
                "id": "snack",
                "label": "Late snack",
                "type": "counter",
                "score_per_unit": -2,
                "sort_order": 3,
            },
            {"id": "retired", "label": "Retired", "active": 0},
        ],
        "badges": [
            {"id": "bronze", "display_name": "Bronze", "min_score": 0, "sort_order": 1},
            {"id": "gold", "display_name": "Gold", "min_score": 80, "sort_order": 2},
        ],
    }
    (root / "habits.yaml").write_text(
        yaml.dump(definitions, default_flow_style=False), encoding="utf-8"
    )

    ledger = {
        "entries": {
            # legacy flat counts, written before lock state existed
            "2026-02-09": {"water": 3, "run": 1},
            "2026-02-10": {
                "counts": {"water": 2, "run": 1, "snack": 1},
                "locked": True,
                "completedAt": "2026-02-10T21:30:00+00:00",
            },
        }
    }
    (root / "habit-day-log.json").write_text(json.dumps(ledger, indent=2), encoding="utf-8")

    os.environ["HABIT_LEDGER_ROOT"] = str(root)
    yield root
    if "HABIT_LEDGER_ROOT" in os.environ:
        del os.environ["HABIT_LEDGER_ROOT"]


@pytest.fixture
def store(tmp_path: Path) -> DayRecordStore:
    """An empty store whose clock is pinned to TODAY."""
    return DayRecordStore(
        tmp_path / "ledger.json",
        today=lambda: TODAY,
        now=lambda: datetime(2026, 2, 11, 21, 30, tzinfo=ZoneInfo("UTC")),
    )


def habit(habit_id: str, **kwargs) -> HabitDefinition:
    kwargs.setdefault("label", habit_id)
    return HabitDefinition(habit_id=habit_id, **kwargs)


def badge(badge_id: str, min_score: float, sort_order: int = 9999, active: bool = True) -> Badge:
    return Badge(badge_id=badge_id, display_name=badge_id, min_score=min_score, sort_order=sort_order, active=active)


def make_entries(by_day: dict[str, dict]) -> dict[str, DayRecord]:
    return {day: DayRecord(counts=counts) for day, counts in by_day.items()}
