"""Typed dataclasses for the habit ledger data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python; from_dict accepts
either spelling. Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Union

Number = Union[int, float]

WEEKDAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
SCHEDULE_TYPES = {"daily", "weekdays", "weekends", "custom"}

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ── Primitives ────────────────────────────────────────────────


def is_iso_date(value: Any) -> bool:
    """True for a ``YYYY-MM-DD`` string naming a real calendar day."""
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_number(value: Any) -> Number | None:
    """Parse a finite number, or return None if *value* is not one."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        if not math.isfinite(parsed):
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def coerce_count(value: Any) -> Number:
    """Coerce a stored count to a finite number; anything else becomes 0."""
    parsed = parse_number(value)
    return 0 if parsed is None else parsed


def normalize_counts(counts: Any) -> dict[str, Number]:
    if not isinstance(counts, dict):
        return {}
    return {str(k): coerce_count(v) for k, v in counts.items()}


def _optional_date(value: Any) -> str | None:
    # YAML loads unquoted dates as datetime.date
    if isinstance(value, date):
        return value.isoformat()
    if value is None or value == "":
        return None
    return str(value).strip() or None


def _parse_schedule_days(raw: Any) -> frozenset[str]:
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        items = raw.split(",")
    else:
        items = [str(item) for item in raw]
    return frozenset(item.strip().title() for item in items if item.strip())


def _pick(d: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First non-null value among *keys*, so snake_case and camelCase both read."""
    for key in keys:
        value = d.get(key)
        if value is not None:
            return value
    return default


# ── Definitions ───────────────────────────────────────────────


@dataclass(frozen=True)
class HabitDefinition:
    habit_id: str
    label: str = ""
    type: str = "toggle"  # toggle, counter
    group_id: str = ""
    polarity: str = "good"  # good, bad
    score_per_unit: float = 0.0
    streak_min_count: Number = 1
    min_count: Number = 0
    max_count: Number = 1
    tooltip: str = ""
    active: bool = True
    sort_order: Number = 9999
    schedule_type: str = "daily"  # daily, weekdays, weekends, custom
    schedule_days: frozenset[str] = field(default_factory=frozenset)
    active_from: str | None = None
    inactive_from: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HabitDefinition:
        habit_id = str(_pick(d, "id", "habit_id", "habitId", default="")).strip()
        type_raw = str(_pick(d, "type", default="")).strip().lower()
        habit_type = "counter" if type_raw == "counter" else "toggle"
        score_per_unit = coerce_count(_pick(d, "score_per_unit", "scorePerUnit", default=0))

        polarity_raw = str(_pick(d, "polarity", default="")).strip().lower()
        if polarity_raw in ("good", "bad"):
            polarity = polarity_raw
        else:
            polarity = "bad" if score_per_unit < 0 else "good"

        min_count = coerce_count(_pick(d, "min_count", "minCount", default=0))
        max_default = 1 if habit_type == "toggle" else 999999
        max_parsed = parse_number(_pick(d, "max_count", "maxCount"))
        max_count = max_default if max_parsed is None else max_parsed
        streak_parsed = parse_number(_pick(d, "streak_min_count", "streakMinCount"))

        active_raw = _pick(d, "active", default=True)
        if isinstance(active_raw, bool):
            active = active_raw
        else:
            active = coerce_count(active_raw) == 1

        return cls(
            habit_id=habit_id,
            label=str(_pick(d, "label", default="")).strip() or habit_id,
            type=habit_type,
            group_id=str(_pick(d, "group_id", "groupId", "group", default="")).strip(),
            polarity=polarity,
            score_per_unit=score_per_unit,
            streak_min_count=max(1, 1 if streak_parsed is None else streak_parsed),
            min_count=min_count,
            max_count=max(min_count, max_count),
            tooltip=str(_pick(d, "tooltip", default="")),
            active=active,
            sort_order=coerce_count(_pick(d, "sort_order", "sortOrder", default=9999)),
            schedule_type=str(_pick(d, "schedule_type", "scheduleType", default="daily")).strip().lower() or "daily",
            schedule_days=_parse_schedule_days(_pick(d, "schedule_days", "scheduleDays")),
            active_from=_optional_date(_pick(d, "active_from", "activeFrom")),
            inactive_from=_optional_date(_pick(d, "inactive_from", "inactiveFrom")),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "habitId": self.habit_id,
            "label": self.label,
            "type": self.type,
            "groupId": self.group_id,
            "polarity": self.polarity,
            "scorePerUnit": self.score_per_unit,
            "streakMinCount": self.streak_min_count,
            "minCount": self.min_count,
            "maxCount": self.max_count,
            "tooltip": self.tooltip,
            "active": self.active,
            "sortOrder": self.sort_order,
            "scheduleType": self.schedule_type,
            "scheduleDays": [day for day in WEEKDAY_ABBR if day in self.schedule_days],
        }
        if self.active_from:
            d["activeFrom"] = self.active_from
        if self.inactive_from:
            d["inactiveFrom"] = self.inactive_from
        return d


@dataclass(frozen=True)
class Badge:
    badge_id: str
    display_name: str = ""
    icon: str = "•"
    color_hex: str = "#94a3b8"
    min_score: float = 0.0
    sort_order: Number = 9999
    active: bool = True

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Badge:
        badge_id = str(_pick(d, "id", "badge_id", "badgeId", default="")).strip()
        active_raw = _pick(d, "active", default=True)
        return cls(
            badge_id=badge_id,
            display_name=str(_pick(d, "display_name", "displayName", default="")).strip() or badge_id,
            icon=str(_pick(d, "icon", default="")).strip() or "•",
            color_hex=str(_pick(d, "color_hex", "colorHex", default="")).strip() or "#94a3b8",
            min_score=coerce_count(_pick(d, "min_score", "minScore", default=0)),
            sort_order=coerce_count(_pick(d, "sort_order", "sortOrder", default=9999)),
            active=active_raw if isinstance(active_raw, bool) else coerce_count(active_raw) == 1,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "badgeId": self.badge_id,
            "displayName": self.display_name,
            "icon": self.icon,
            "colorHex": self.color_hex,
            "minScore": self.min_score,
            "sortOrder": self.sort_order,
            "active": self.active,
        }


@dataclass(frozen=True)
class Group:
    group_id: str
    group_label: str = ""
    sort_order: Number = 9999

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Group:
        group_id = str(_pick(d, "id", "group_id", "groupId", default="")).strip()
        return cls(
            group_id=group_id,
            group_label=str(_pick(d, "label", "groupLabel", default="")).strip() or group_id,
            sort_order=coerce_count(_pick(d, "sort_order", "sortOrder", default=9999)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"groupId": self.group_id, "groupLabel": self.group_label, "sortOrder": self.sort_order}


@dataclass
class Definitions:
    habits: list[HabitDefinition] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    badges: list[Badge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "habits": [h.to_dict() for h in self.habits],
            "groups": [g.to_dict() for g in self.groups],
            "badges": [b.to_dict() for b in self.badges],
        }


# ── Ledger ────────────────────────────────────────────────────


@dataclass
class DayRecord:
    counts: dict[str, Number] = field(default_factory=dict)
    locked: bool = False
    completed_at: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DayRecord:
        """Build from the structured shape. Legacy flat shapes are handled by the store."""
        if not d or not isinstance(d, dict):
            return cls()
        completed_at = d.get("completedAt", d.get("completed_at"))
        return cls(
            counts=normalize_counts(d.get("counts")),
            locked=d.get("locked") is True,
            completed_at=completed_at if isinstance(completed_at, str) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "counts": dict(self.counts),
            "locked": self.locked,
            "completedAt": self.completed_at,
        }

    def count_for(self, habit_id: str) -> Number:
        return coerce_count(self.counts.get(habit_id, 0))

    def has_progress(self) -> bool:
        return any(coerce_count(v) != 0 for v in self.counts.values())


@dataclass
class Ledger:
    entries: dict[str, DayRecord] = field(default_factory=dict)
    # Keys that are not ISO dates; written back untouched.
    extras: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        entries: dict[str, Any] = dict(self.extras)
        for day in sorted(self.entries):
            entries[day] = self.entries[day].to_dict()
        return {"entries": entries}


# ── Analytics ─────────────────────────────────────────────────


@dataclass
class ScoreModel:
    score: float = 0.0
    score_percent: float = 0.0
    max_positive_score: float = 0.0
    max_negative_magnitude: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "scorePercent": self.score_percent,
            "maxPositiveScore": self.max_positive_score,
            "maxNegativeMagnitude": self.max_negative_magnitude,
        }


@dataclass
class SignStreak:
    length: int = 0
    is_positive: bool = True


@dataclass
class HabitStreak:
    habit_id: str = ""
    label: str = ""
    current_streak: int = 0
    streak_min_count: Number = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "label": self.label,
            "currentStreak": self.current_streak,
            "streakMinCount": self.streak_min_count,
        }


@dataclass
class TimelinePoint:
    date: str = ""
    score: float = 0.0
    qualified_count: int = 0
    total_habits: int = 0
    badge: Badge | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "score": self.score,
            "qualifiedCount": self.qualified_count,
            "totalHabits": self.total_habits,
            "badge": self.badge.to_dict() if self.badge else None,
        }


@dataclass
class BadgeDay:
    date: str = ""
    score: float = 0.0
    badge: Badge | None = None
    has_progress: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "date": self.date,
            "score": self.score,
            "badge": self.badge.to_dict() if self.badge else None,
        }
        if self.has_progress is not None:
            d["hasProgress"] = self.has_progress
        return d


@dataclass
class Averages:
    days7: float = 0.0
    days30: float = 0.0
    days365: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "days7": round(self.days7, 3),
            "days30": round(self.days30, 3),
            "days365": round(self.days365, 3),
        }


@dataclass
class AnalyticsSummary:
    generated_for_date: str = ""
    total_score: float = 0.0
    qualified_habits_for_day: int = 0
    total_habits: int = 0
    habit_count: int = 0
    global_streak: int = 0
    per_habit: list[HabitStreak] = field(default_factory=list)
    timeline: list[TimelinePoint] = field(default_factory=list)
    badge_timeline: list[BadgeDay] = field(default_factory=list)
    daily_badge: Badge | None = None
    sign_streak: int = 0
    sign_streak_is_positive: bool = True
    averages: Averages = field(default_factory=Averages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "generatedForDate": self.generated_for_date,
            "totalScore": self.total_score,
            "qualifiedHabitsForDay": self.qualified_habits_for_day,
            "totalHabits": self.total_habits,
            "habitCount": self.habit_count,
            "globalStreak": self.global_streak,
            "perHabit": [h.to_dict() for h in self.per_habit],
            "timeline": [p.to_dict() for p in self.timeline],
            "badgeTimeline": [b.to_dict() for b in self.badge_timeline],
            "dailyBadge": self.daily_badge.to_dict() if self.daily_badge else None,
            "signStreak": self.sign_streak,
            "signStreakIsPositive": self.sign_streak_is_positive,
            "averages": self.averages.to_dict(),
        }


@dataclass
class OpenDay:
    date: str = ""
    locked: bool = False
    has_progress: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "locked": self.locked, "hasProgress": self.has_progress}


# ── History ───────────────────────────────────────────────────


@dataclass
class HabitHistoryDay:
    date: str = ""
    count: Number = 0
    qualified: bool = False
    score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "count": self.count, "qualified": self.qualified, "score": self.score}


@dataclass
class HabitHistory:
    habit_id: str = ""
    label: str = ""
    type: str = "toggle"
    score_per_unit: float = 0.0
    streak_min_count: Number = 1
    total_count: Number = 0
    total_score: float = 0.0
    days_active: int = 0
    daily_records: list[HabitHistoryDay] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "label": self.label,
            "type": self.type,
            "scorePerUnit": self.score_per_unit,
            "streakMinCount": self.streak_min_count,
            "totalCount": self.total_count,
            "totalScore": self.total_score,
            "daysActive": self.days_active,
            "dailyRecords": [r.to_dict() for r in self.daily_records],
        }
